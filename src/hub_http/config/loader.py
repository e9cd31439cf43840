import json
import yaml
from typing import Any, Callable
from pathlib import Path
from pydantic import ValidationError

from hub_http.config.models.pipeline import HttpPipelineConfig
from hub_http.config.preprocessor import ConfigPreprocessor, ConfigValue
from hub_http.core.exceptions import PipelineConfigError


class ConfigLoader:
    """
    Load + preprocess + validate pipeline configs from YAML/JSON.

    - Preprocessors run on raw data before Pydantic validation.
    - Result is fully validated HttpPipelineConfig
    - Unreadable or invalid input raises PipelineConfigError
    """

    def __init__(self, preprocessors: list[ConfigPreprocessor] | None = None):
        self._preprocessors = preprocessors or []

    def add_preprocessor(self, preprocessor: ConfigPreprocessor) -> None:
        self._preprocessors.append(preprocessor)

    def from_yaml(self, source: str | Path) -> HttpPipelineConfig:
        data = self._load(source, parser=yaml.safe_load)
        return self._build(data)

    def from_json(self, source: str | Path) -> HttpPipelineConfig:
        data = self._load(source, parser=json.loads)
        return self._build(data)

    def from_dict(self, data: dict[str, Any]) -> HttpPipelineConfig:
        return self._build(data)

    def _load(
        self,
        source: str | Path,
        *,
        parser: Callable[[str], Any],
    ) -> ConfigValue:
        """
        Load config from a file path or raw string, then parse.
        """
        text = self._read_source(source)
        try:
            return parser(text)
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise PipelineConfigError(f"Could not parse pipeline config: {e}") from e

    def _read_source(self, source: str | Path) -> str:
        """
        Read source as text.
        If `source` is a file path, read it.
        Otherwise treat it as raw content.
        """
        if isinstance(source, Path):
            try:
                return source.read_text()
            except OSError as e:
                raise PipelineConfigError(f"Could not read pipeline config {source}: {e}") from e

        # string: path or raw content?
        if "\n" not in source:
            try:
                p = Path(source)
                if p.is_file():
                    return p.read_text()
            except OSError:
                # raw content longer than the OS allows for a file name
                pass

        return source

    def _build(self, data: ConfigValue) -> HttpPipelineConfig:
        """
        Apply preprocessors and validate into HttpPipelineConfig.
        """
        if not isinstance(data, dict):
            raise PipelineConfigError(
                f"Pipeline config must be a mapping, got {type(data).__name__}"
            )

        try:
            for pre in self._preprocessors:
                data = pre.process(data)
        except KeyError as e:
            raise PipelineConfigError(f"Could not preprocess pipeline config: {e}") from e

        try:
            return HttpPipelineConfig.model_validate(data)
        except ValidationError as e:
            raise PipelineConfigError(str(e)) from e
