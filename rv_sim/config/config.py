import importlib.resources as resources
from copy import deepcopy

import yaml

from rv_sim.util.exceptions import ConfigurationError


class SimulatorConfiguration:
    DEFAULT_CONFIG_FILE = "rv_sim_config.yaml"

    def __init__(self, settings):
        self.settings = settings

    @classmethod
    def defaults(cls):
        if not hasattr(cls, "default_settings"):
            with (
                resources.files("rv_sim.config")
                .joinpath(cls.DEFAULT_CONFIG_FILE)
                .open("r") as f
            ):
                cls.default_settings = yaml.safe_load(f)
        return deepcopy(cls.default_settings)

    @classmethod
    def load(cls, path=None, overrides=None):
        """
        Build a configuration from the packaged defaults, then any user YAML file,
        then a dictionary of overrides. Keys not present in the defaults are
        rejected so that typos do not silently fall back to a default value.
        """
        settings = cls.defaults()
        if path is not None:
            with open(path, "r") as f:
                user_settings = yaml.safe_load(f)
            if user_settings is not None:
                cls._merge(settings, user_settings, "")
        if overrides is not None:
            cls._merge(settings, overrides, "")
        return cls(settings)

    @classmethod
    def _merge(cls, target, source, prefix):
        if not isinstance(source, dict):
            raise ConfigurationError(
                f"Configuration section '{prefix or '<root>'}' must be a mapping"
            )
        for key, value in source.items():
            full_key = f"{prefix}.{key}" if prefix else key
            if key not in target:
                raise ConfigurationError(f"Unknown configuration key '{full_key}'")
            if isinstance(target[key], dict):
                cls._merge(target[key], value, full_key)
            else:
                target[key] = value

    def get(self, key):
        """Look up a dotted key, for instance 'core.reset_vector'."""
        value = self.settings
        for part in key.split("."):
            if not isinstance(value, dict) or part not in value:
                raise ConfigurationError(f"'{key}' not in configuration")
            value = value[part]
        return value

    def __getitem__(self, key):
        return self.get(key)

    def getResetVector(self):
        return self.get("core.reset_vector")

    def getInstructionMemoryLayout(self):
        return self.get("instruction_memory.base"), self.get("instruction_memory.words")

    def getDataMemoryLayout(self):
        return self.get("data_memory.base"), self.get("data_memory.words")
