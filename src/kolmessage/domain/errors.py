"""Domain-specific exception classes for the message generator.

Messages are user-facing and shown verbatim by the API and CLI.
"""


class KOLMessageError(Exception):
    """Base class for all domain errors in the message generator."""


class MissingRequiredFieldsError(KOLMessageError):
    """Raised when required form fields are blank before rendering.

    Attributes:
        fields: The template keys of the blank required fields.
    """

    def __init__(self, fields: list[str]) -> None:
        self.fields = fields
        super().__init__("請填寫所有必填欄位 (聯絡人, KOL)")


class MissingTemplateError(KOLMessageError):
    """Raised when no message template is available to render."""

    def __init__(self) -> None:
        super().__init__("沒有可用的訊息範本。")


class FanOfferTooShortError(KOLMessageError):
    """Raised when the fan-offer text is too short to be polished."""

    def __init__(self, min_length: int) -> None:
        self.min_length = min_length
        super().__init__(f"請至少輸入 {min_length} 個字的粉絲優惠內容才能進行潤飾。")


class PresetError(KOLMessageError):
    """Raised when a deal preset cannot be saved."""


class PresetNotFoundError(KOLMessageError):
    """Raised when a preset or template preset id does not exist.

    Attributes:
        preset_id: The id that was looked up.
    """

    def __init__(self, preset_id: str, message: str = "找不到對應的方案。") -> None:
        self.preset_id = preset_id
        super().__init__(message)


class TemplatePresetError(KOLMessageError):
    """Raised when a template preset operation is rejected."""
