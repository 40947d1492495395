"""
Fixed literals shared by the classifier, the intake pipeline and the ledger.
"""

# Exact answer the vision model gives when the image is not a payment receipt.
# The prompt instructs the model to reply with this literal, so it must not be
# translated or reformatted.
NOT_RECEIPT_SENTINEL = "Não é PIX"

DEFAULT_MIME_TYPE = "image/jpeg"

# Full month names per ledger locale, January first.
MONTH_NAMES = {
    "pt-BR": [
        "janeiro", "fevereiro", "março", "abril", "maio", "junho",
        "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
    ],
    "en-US": [
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ],
    "es": [
        "enero", "febrero", "marzo", "abril", "mayo", "junio",
        "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
    ],
}

# Extension used when the transport only tells us the MIME type
MIME_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
}
