# Exceptions raised by services and routes, rendered as {success: false, message}


class ApiError(Exception):
    status_code = 500
    message = 'Server error'

    def __init__(self, message=None, status_code=None):
        super().__init__(message or self.message)
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {'success': False, 'message': self.message}


class ValidationError(ApiError):
    status_code = 400
    message = 'Invalid request'


class Conflict(ApiError):
    status_code = 400
    message = 'Request conflicts with existing data'


class DuplicateUser(Conflict):
    message = 'User already exists'


class Unauthenticated(ApiError):
    status_code = 401
    message = 'Not authorized to access this route'


class InvalidCredentials(Unauthenticated):
    message = 'Invalid credentials'


class Forbidden(ApiError):
    status_code = 403
    message = 'Not authorized to perform this action'


class NotFound(ApiError):
    status_code = 404
    message = 'Resource not found'


class InternalError(ApiError):
    status_code = 500
