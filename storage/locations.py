"""Data location categories. A location is a tag; path providers turn it into a directory."""
from enum import Enum


class DataLocation(Enum):
    APPLICATION_DATA = "application_data"
    USER_DATA = "user_data"
    SAVE_DATA = "save_data"
