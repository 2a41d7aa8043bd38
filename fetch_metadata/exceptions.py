"""Errors raised while fetching and writing instance metadata"""


class MetadataError(Exception):
    """Base class for everything this package raises"""


class FatalSetupError(MetadataError):
    """The configuration root could not be created or entered"""


class FetchError(MetadataError):
    def __init__(self, url, message):
        super().__init__(f'{message} ({url})')
        self.url = url


class NetworkError(FetchError):
    """Request could not be sent, timed out or the connection failed"""


class UnexpectedStatus(FetchError):
    def __init__(self, url, status_code):
        super().__init__(url, f'unexpected status code: {status_code}')
        self.status_code = status_code


class ReadError(FetchError):
    """Response body could not be read completely"""


class MaterializeError(MetadataError):
    def __init__(self, path, message):
        super().__init__(f'{message} ({path})')
        self.path = path


class DirectoryError(MaterializeError):
    pass


class WriteError(MaterializeError):
    pass


class MalformedEnvironmentValue(MetadataError):
    """Value does not have the key,file,mode shape"""


class ModeParseError(MetadataError):
    """Mode is not a valid octal number"""
