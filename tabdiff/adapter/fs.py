import functools
import os
import pathlib
import typing

from tabdiff import data

__all__ = (
    "get_default_config_path",
    "get_log_folder",
)

LOG_FOLDER_ENV_VAR: typing.Final[str] = "TABDIFF_LOG_FOLDER"


@functools.lru_cache
def get_default_config_path() -> pathlib.Path:
    return pathlib.Path.cwd() / "tabdiff.json"


@functools.lru_cache
def get_log_folder() -> pathlib.Path | data.Error:
    try:
        if env_folder := os.environ.get(LOG_FOLDER_ENV_VAR):
            folder = pathlib.Path(env_folder)
        else:
            folder = pathlib.Path.cwd() / "logs"

        folder.mkdir(parents=True, exist_ok=True)
        return folder
    except Exception as e:
        return data.Error.new(str(e))
