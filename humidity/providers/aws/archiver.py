"""Packages handler source into a Lambda deployment zip."""

import os
import tempfile
import zipfile

import humidity.constants as CONSTANTS
from humidity.logger import logger


def pack(source_code: str, entry_file: str = CONSTANTS.LAMBDA_ENTRY_FILE) -> bytes:
    """Zip a single source string into a deployable Lambda archive.

    The source is written to ``entry_file`` inside a fresh temporary
    directory, which is removed whether or not compression succeeds.

    Args:
        source_code: Handler source text
        entry_file: Name of the file inside the archive

    Returns:
        Bytes of the zipped Lambda package
    """
    with tempfile.TemporaryDirectory(prefix="lambda-") as temp_dir:
        code_path = os.path.join(temp_dir, entry_file)
        with open(code_path, "w", encoding="utf-8") as f:
            f.write(source_code)

        archive_path = os.path.join(temp_dir, CONSTANTS.LAMBDA_ARCHIVE_NAME)
        with zipfile.ZipFile(archive_path, "w", zipfile.ZIP_DEFLATED, compresslevel=9) as zf:
            zf.write(code_path, arcname=entry_file)

        with open(archive_path, "rb") as f:
            archive = f.read()

    logger.debug(f"Packed {entry_file} into {len(archive)} byte archive")
    return archive
