from bucket_nuke.cli import main

main()
