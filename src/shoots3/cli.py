import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from botocore.exceptions import BotoCoreError, ClientError

from . import __version__
from . import config as cfg
from .keygen import generate_key
from .sniff import sniff_file
from .storage import StorageConfigError, open_store

logger = logging.getLogger(__name__)


def _key_length(value: str) -> int:
    try:
        length = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if length < 0:
        raise argparse.ArgumentTypeError(f"length must be non-negative, got {length}")
    return length


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="shoot",
        usage="%(prog)s [flags] filename",
        description="Upload a file to an S3 bucket and print its public URL.",
    )
    p.add_argument("filename", nargs="*", help="Path to the file to upload")
    p.add_argument("-k", "--key", default="", help="custom key")
    p.add_argument(
        "-l",
        "--length",
        type=_key_length,
        default=cfg.DEFAULT_KEY_LENGTH,
        help=f"generated url length (default: {cfg.DEFAULT_KEY_LENGTH})",
    )
    p.add_argument(
        "-b",
        "--bucket",
        default="",
        help=f"S3 bucket to upload the file (defaults to env {cfg.BUCKET_ENV})",
    )
    p.add_argument("-r", "--region", default="", help=f"AWS region (defaults to env {cfg.REGION_ENV})")
    p.add_argument("-f", "--force", action="store_true", help="force override existing file")
    p.add_argument(
        "-e",
        "--endpoint",
        default="",
        help="Use a custom S3 endpoint (such as a MinIO deployment)",
    )
    p.add_argument(
        "--profile",
        default=None,
        help="AWS profile name to use for credentials (optional)",
    )
    p.add_argument(
        "--path-style",
        action="store_true",
        help="Use path-style addressing (required by some S3-compatible services)",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Log debug details to stderr")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def print_usage(parser: argparse.ArgumentParser) -> None:
    print(parser.format_help().replace("usage:", "Syntax:", 1), end="")


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def resolve_bucket(args: argparse.Namespace) -> Optional[str]:
    # Priority: -b flag > env SHOOTS3_DEFAULT_BUCKET
    return args.bucket or os.getenv(cfg.BUCKET_ENV) or None


def resolve_region(args: argparse.Namespace) -> Optional[str]:
    # Priority: -r flag > env AWS_REGION
    return args.region or os.getenv(cfg.REGION_ENV) or None


def resolve_endpoint(args: argparse.Namespace) -> Optional[str]:
    # Priority: -e flag > default AWS endpoint
    return args.endpoint or None


def object_url(region: str, bucket: str, key: str) -> str:
    # TODO: build the URL from the custom endpoint when one was used for the upload.
    return cfg.OBJECT_URL_TEMPLATE.format(region=region, bucket=bucket, key=key)


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    parser = build_parser()
    if not argv:
        print_usage(parser)
        return 0

    args = parser.parse_intermixed_args(argv)
    configure_logging(args.verbose)

    if len(args.filename) != 1:
        print_usage(parser)
        return 0
    path = Path(args.filename[0])

    key: str = args.key or generate_key(args.length)

    bucket = resolve_bucket(args)
    if not bucket:
        print(f"{cfg.BUCKET_ENV} is not set", file=sys.stderr)
        return 1

    region = resolve_region(args)
    if not region:
        print(f"{cfg.REGION_ENV} is not set", file=sys.stderr)
        return 1

    endpoint_url = resolve_endpoint(args)
    use_path_style = bool(args.path_style or cfg.DEFAULT_USE_PATH_STYLE)

    try:
        fp = path.open("rb")
    except FileNotFoundError:
        print(f"File does not exist: {path}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Unable to open {path}: {e}", file=sys.stderr)
        return 1

    with fp:
        try:
            content_type = sniff_file(fp)
        except OSError as e:
            print(f"Unable to read {path}: {e}", file=sys.stderr)
            return 1
        logger.debug("Uploading %s to s3://%s/%s as %s", path, bucket, key, content_type)
        if endpoint_url:
            logger.debug("Using custom endpoint %s", endpoint_url)

        try:
            store = open_store(
                region=region,
                profile=args.profile,
                endpoint_url=endpoint_url,
                use_path_style=use_path_style,
            )
        except StorageConfigError as e:
            print(f"Unable to load SDK config, {e}", file=sys.stderr)
            return 1

        if not args.force and store.exists(bucket, key):
            print(f"File already exists with the same key: {key}")
            return 0

        try:
            store.put(bucket, key, fp, content_type)
        except (ClientError, BotoCoreError) as e:
            print(f"Failed to upload your file: {e}", file=sys.stderr)
            return 1

    print(object_url(region, bucket, key))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
