from .reinfate_error import VALIDATION_ERROR_CODE, ReinfateError

__all__ = ["ReinfateError", "VALIDATION_ERROR_CODE"]
