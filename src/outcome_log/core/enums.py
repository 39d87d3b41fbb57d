"""Enumerations used across outcome logging."""

from enum import Enum


class DomainObjectKey(str, Enum):
    """Well-known field names, to keep keys consistent between call sites."""

    USER_ID = "userId"
    USER_EMAIL = "userEmail"
    ERIGHTS_ID = "erightsId"
    ERIGHTS_GROUP_ID = "erightsGroupId"


class OutcomeStatus(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"
