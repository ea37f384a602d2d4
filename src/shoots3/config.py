"""
Centralized defaults for shoots3.

Edit these constants to set project defaults. CLI flags and environment
variables will override these values at runtime.
"""

import string

# Length of a generated object key. Override via CLI `-l`.
DEFAULT_KEY_LENGTH: int = 6

# Characters a generated key is drawn from (a-z then A-Z).
KEY_ALPHABET: str = string.ascii_letters

# Bucket used when `-b` is not given.
BUCKET_ENV: str = "SHOOTS3_DEFAULT_BUCKET"

# Region used when `-r` is not given.
REGION_ENV: str = "AWS_REGION"

# Whether to use path-style addressing ("https://endpoint/bucket/key")
# Some S3-compatible services require this.
DEFAULT_USE_PATH_STYLE: bool = False

# Printed after a successful upload. Always the public AWS form, even when a
# custom endpoint was used for the upload itself.
OBJECT_URL_TEMPLATE: str = "https://s3-{region}.amazonaws.com/{bucket}/{key}"

# Number of leading bytes inspected to detect the content type.
SNIFF_LEN: int = 512
