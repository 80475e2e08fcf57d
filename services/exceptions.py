# services/exceptions.py
from enum import Enum


class ErrorCode(str, Enum):
    """표준화된 에러 코드"""
    NOT_FOUND = "NOT_FOUND"
    INVALID_HIERARCHY = "INVALID_HIERARCHY"
    CONFLICT = "CONFLICT"
    UNAUTHORIZED = "UNAUTHORIZED"


class NoteFlowError(Exception):
    """서비스 계층 에러의 공통 부모. HTTP 변환은 main.py의 핸들러가 담당."""
    error_code = ErrorCode.NOT_FOUND

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(NoteFlowError):
    # 존재하지 않는 경우와 다른 유저 소유인 경우를 구분하지 않음
    error_code = ErrorCode.NOT_FOUND


class InvalidHierarchyError(NoteFlowError):
    error_code = ErrorCode.INVALID_HIERARCHY

    SELF_PARENT = "self_parent"
    CYCLE = "cycle"
    CORRUPT_CHAIN = "corrupt_chain"

    def __init__(self, message: str, reason: str):
        super().__init__(message)
        self.reason = reason


class ConflictError(NoteFlowError):
    error_code = ErrorCode.CONFLICT


class AuthenticationError(NoteFlowError):
    error_code = ErrorCode.UNAUTHORIZED
