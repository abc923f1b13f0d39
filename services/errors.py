"""서비스 계층 예외.

라우트에서는 ServiceError 하위 예외를 그대로 raise 하고,
app.py 의 에러 핸들러가 status_code 에 맞춰 JSON 응답으로 변환한다.
"""


class ServiceError(Exception):
    status_code = 500
    default_message = "An internal server error occurred."

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    def to_dict(self):
        return {"success": False, "message": self.message}


class ValidationError(ServiceError):
    status_code = 400
    default_message = "Invalid request."


class AuthError(ServiceError):
    status_code = 401
    default_message = "Invalid credentials"


class ForbiddenError(ServiceError):
    status_code = 403
    default_message = "Not authorized"


class NotFoundError(ServiceError):
    status_code = 404
    default_message = "Not found."


class ConflictError(ServiceError):
    status_code = 409
    default_message = "Already exists."


class TooManyAttemptsError(ServiceError):
    status_code = 429
    default_message = "Too many login attempts. Please try again in 5 minutes."


class DispatchError(ServiceError):
    """알림 채널(이메일/메신저) 발송 실패."""
    status_code = 500
    default_message = "Failed to deliver the message."


class ChannelNotReadyError(DispatchError):
    """메신저 세션이 대기 시간 안에 준비되지 않음."""
    default_message = "Messaging channel not ready after timeout."


class ServerError(ServiceError):
    status_code = 500
