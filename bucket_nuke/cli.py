"""Command line entry point."""

from __future__ import annotations

import argparse
import logging
import sys

from bucket_nuke.backend import S3Backend
from bucket_nuke.config import NukeConfig
from bucket_nuke.errors import BackendError, BucketNukeError, CancellationError
from bucket_nuke.executor import BatchExecutor
from bucket_nuke.prompts import Prompter
from bucket_nuke.validators import ValidatorChain
from bucket_nuke.workflow import WorkflowController

logger = logging.getLogger(__name__)

EXIT_INTERRUPTED = 130


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    if not verbose:
        for noisy in ("botocore", "boto3", "urllib3"):
            logging.getLogger(noisy).setLevel(logging.WARNING)


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Returns:
        Parsed arguments namespace.
    """
    parser = argparse.ArgumentParser(
        prog="bucket-nuke",
        description="Interactively select, empty and delete S3 buckets",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                Interactive mode - select up to 5 buckets
  %(prog)s --list                         List all buckets without deleting
  %(prog)s --protect prod --max-buckets 3 Add a protected name, lower the limit
  %(prog)s --endpoint-url http://localhost:9000  Use an S3 compatible service

Environment Variables:
  AWS_REGION / AWS_DEFAULT_REGION   Region (default: us-east-1)
  BUCKET_NUKE_ENDPOINT_URL          Custom S3 endpoint
  BUCKET_NUKE_MAX_BUCKETS           Maximum buckets per run (default: 5)
  BUCKET_NUKE_PROTECTED_NAMES       Comma separated protected substrings
        """,
    )
    parser.add_argument(
        "--list", "-l", action="store_true", help="List buckets without deleting"
    )
    parser.add_argument("--region", type=str, help="AWS region")
    parser.add_argument("--profile", type=str, help="AWS profile name")
    parser.add_argument("--endpoint-url", type=str, help="Custom S3 endpoint URL")
    parser.add_argument(
        "--max-buckets",
        type=int,
        help="Maximum number of buckets per run (default: 5)",
    )
    parser.add_argument(
        "--protect",
        action="append",
        default=[],
        metavar="NAME",
        help="Additional protected substring (repeatable)",
    )
    parser.add_argument(
        "--delete-after-empty-failure",
        action="store_true",
        help="Still try to delete a bucket when emptying it failed",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> NukeConfig:
    """Merge command line options over the environment configuration."""
    config = NukeConfig.from_environment()
    if args.region:
        config.region = args.region
    if args.profile:
        config.profile = args.profile
    if args.endpoint_url:
        config.endpoint_url = args.endpoint_url
    if args.delete_after_empty_failure:
        config.skip_delete_on_empty_failure = False
    return config.with_rules(max_buckets=args.max_buckets, extra_protected=args.protect)


def run(
    argv: list[str] | None = None,
    backend: S3Backend | None = None,
    prompter: Prompter | None = None,
) -> int:
    """
    Run bucket-nuke and return the process exit code.

    Args:
        argv: Command line arguments, defaults to sys.argv.
        backend: Storage backend override.
        prompter: Prompt layer override.
    """
    args = parse_arguments(argv)
    configure_logging(args.verbose)

    try:
        config = build_config(args)
        backend = backend or S3Backend(config)

        if args.list:
            buckets = backend.list_buckets()
            logger.info("\n=== Buckets Found ===")
            for i, bucket in enumerate(buckets, 1):
                logger.info(f"{i}. {bucket}")
            return 0

        controller = WorkflowController(
            backend=backend,
            validators=ValidatorChain(config.rules),
            executor=BatchExecutor(
                backend,
                skip_delete_on_empty_failure=config.skip_delete_on_empty_failure,
            ),
            prompter=prompter or Prompter(),
        )
        controller.run()
        return 0

    except CancellationError as e:
        logger.info(str(e))
        return e.exit_code
    except BackendError as e:
        logger.error(f"{e.operation} failed: {e}")
        return e.exit_code
    except BucketNukeError as e:
        logger.error(str(e))
        return e.exit_code
    except KeyboardInterrupt:
        logger.warning("\n\nOperation interrupted by user")
        return EXIT_INTERRUPTED


def main() -> None:
    """Console script entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()
