class CardError(Exception):
    """Base error for the card generator"""
    pass

class CaptureTargetMissingError(CardError):
    """The export-mode card is not rendered (the app is not in preview)"""
    pass

class MalformedPhoneError(CardError, ValueError):
    """Phone input does not reduce to exactly 8 digits"""

    def __init__(self, phone: str):
        super().__init__(f"Expected 8 digits, got {phone!r}")
        self.phone = phone

class ExportError(CardError):
    """Rasterizing or encoding an export failed"""
    pass
