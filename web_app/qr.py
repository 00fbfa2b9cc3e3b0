"""QR code rendering for short URLs."""

import io

import qrcode
from qrcode.constants import ERROR_CORRECT_M

QR_BORDER = 4


def render_qr_png(data: str, size: int = 256) -> bytes:
    """Render data as a PNG QR code roughly size pixels wide.

    Module size is chosen as the largest whole number of pixels that keeps
    the image within size, with a floor of one pixel per module.
    """
    qr = qrcode.QRCode(error_correction=ERROR_CORRECT_M, border=QR_BORDER)
    qr.add_data(data)
    qr.make(fit=True)

    modules = qr.modules_count + 2 * QR_BORDER
    qr.box_size = max(1, size // modules)

    img = qr.make_image()
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()
