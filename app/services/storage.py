import os
import uuid
from flask import current_app, url_for
from werkzeug.utils import secure_filename
from app.exceptions import ValidationError

ALLOWED_IMAGE_EXTENSIONS = {"png", "jpg", "jpeg", "gif", "webp"}


def _extension(filename: str, mimetype: str) -> str:
    name = secure_filename(filename or "")
    ext = name.rsplit(".", 1)[-1].lower() if "." in name else ""
    if ext in ALLOWED_IMAGE_EXTENSIONS:
        return ext
    subtype = (mimetype or "").split("/", 1)[-1].lower()
    return "jpg" if subtype == "jpeg" else subtype


def save_item_image(file) -> str:
    """Store an uploaded item image and return its public URL."""
    if file is None or not file.filename:
        raise ValidationError("No file uploaded")
    if not (file.mimetype or "").startswith("image/"):
        raise ValidationError("Only image uploads are allowed")

    limit = current_app.config["MAX_IMAGE_BYTES"]
    data = file.read(limit + 1)
    if len(data) > limit:
        raise ValidationError(f"Image must be {limit // (1024 * 1024)}MB or smaller")
    if not data:
        raise ValidationError("Uploaded file is empty")

    ext = _extension(file.filename, file.mimetype)
    if ext not in ALLOWED_IMAGE_EXTENSIONS:
        raise ValidationError("Unsupported image type")

    folder = current_app.config["UPLOAD_FOLDER"]
    os.makedirs(folder, exist_ok=True)
    stored = f"{uuid.uuid4().hex}.{ext}"
    with open(os.path.join(folder, stored), "wb") as fh:
        fh.write(data)

    base = current_app.config.get("PUBLIC_BASE_URL")
    if base:
        return f"{base.rstrip('/')}/uploads/{stored}"
    return url_for("uploads.serve_upload", filename=stored, _external=True)
