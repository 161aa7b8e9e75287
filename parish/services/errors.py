"""Exceptions raised by the content services; routers map them to HTTP codes."""


class ContentError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RecordNotFoundError(ContentError):
    status_code = 404


class ContentSaveError(ContentError):
    status_code = 500


class InvalidContentError(ContentError):
    status_code = 400
