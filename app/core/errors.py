# app/core/errors.py
"""Errors raised by the services and turned into ``{"error": message}`` bodies."""


class ServiceError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Unauthorized(ServiceError):
    """Missing or invalid bearer credential."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class PermissionDenied(ServiceError):
    """The caller is authenticated but their role may not perform the action."""


class InvalidRequest(ServiceError):
    pass


class NotFound(ServiceError):
    pass


class ProfileNotFound(NotFound):
    def __init__(self, message: str = "User profile not found in database. Please contact support."):
        super().__init__(message)


class RouteNotFound(ServiceError):
    status_code = 404

    def __init__(self, message: str = "Endpoint not found"):
        super().__init__(message)


class MethodNotAllowed(ServiceError):
    status_code = 405

    def __init__(self, message: str = "Method not allowed"):
        super().__init__(message)
