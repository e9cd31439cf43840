from __future__ import annotations
import os
import re
from abc import ABC, abstractmethod
from typing import Mapping, TypeAlias


ConfigScalar: TypeAlias = str | int | float | bool | None
ConfigValue: TypeAlias = (
    ConfigScalar | dict[str, "ConfigValue"] | list["ConfigValue"]
)


class ConfigPreprocessor(ABC):
    """
    Transforms raw config structures (dict/list/str) BEFORE pydantic validation.

    Examples:
        - Resolve ${ENV_VAR} placeholders
        - Apply overlays (base.yaml + env.yaml)
    """

    @abstractmethod
    def process(self, data: ConfigValue) -> ConfigValue: ...


class EnvVarPreprocessor(ConfigPreprocessor):
    """
    Resolves ${NAME} and ${NAME:-default} placeholders from the environment.
    A placeholder without a default whose variable is unset raises KeyError.
    """

    def __init__(self, environ: Mapping[str, str] | None = None):
        self._environ = environ if environ is not None else os.environ
        self._env_pattern = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)(?::-([^}]*))?\}")

    def _replace_env(self, s: str) -> str:
        def replace(m: re.Match) -> str:
            name, default = m.groups()
            if name in self._environ:
                return self._environ[name]
            if default is not None:
                return default
            raise KeyError(f"Environment variable '{name}' is not set")

        return self._env_pattern.sub(replace, s)

    def process(self, data: ConfigValue) -> ConfigValue:
        if isinstance(data, dict):
            return {k: self.process(v) for k, v in data.items()}

        if isinstance(data, list):
            return [self.process(v) for v in data]

        if isinstance(data, str):
            return self._replace_env(data)

        return data
