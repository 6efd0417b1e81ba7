# datasources/exceptions.py

from typing import Optional


class DataSourceError(Exception):
    def __init__(self, message: str = "", status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class DataSourceUnavailable(DataSourceError):
    pass


class QueryTimeout(DataSourceError):
    pass


class InvalidRequest(DataSourceError):
    pass


class CountryNotFound(InvalidRequest):
    pass


class BackendStartupTimeout(DataSourceError):
    pass
