"""
bucket-nuke - interactively empty and delete S3 buckets.

Lists the buckets visible to the current credentials, lets the operator pick a
small number of them, refuses protected names, asks for confirmation, and then
empties (every object version and delete marker) and deletes each bucket.
"""

__version__ = "0.1.0"
