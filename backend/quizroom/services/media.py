import logging
import os
import secrets
import time

from werkzeug.utils import secure_filename

from quizroom.services.errors import InvalidInput
from quizroom.services.sanitize import validate_upload

log = logging.getLogger(__name__)


def store_upload(file_storage, config) -> dict:
    """
    Validate an uploaded file and write it under MEDIA_DIR with a random name.

    Returns ``{"filename", "url", "content_type", "size"}``.
    """
    data = file_storage.read()
    content_type = file_storage.mimetype
    check = validate_upload(len(data), content_type, max_size=config["MAX_UPLOAD_BYTES"])
    if not check["valid"]:
        raise InvalidInput(check["error"])

    original = secure_filename(file_storage.filename or "")
    ext = original.rsplit(".", 1)[-1].lower() if "." in original else "bin"
    filename = f"{secrets.token_hex(6)}_{int(time.time() * 1000)}.{ext}"

    os.makedirs(config["MEDIA_DIR"], exist_ok=True)
    with open(os.path.join(config["MEDIA_DIR"], filename), "wb") as f:
        f.write(data)

    log.info("media: stored %s (%s, %d bytes)", filename, content_type, len(data))
    return {
        "filename":     filename,
        "url":          f"{config['MEDIA_BASE_URL'].rstrip('/')}/{filename}",
        "content_type": content_type,
        "size":         len(data),
    }
