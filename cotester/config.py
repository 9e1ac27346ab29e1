"""Methods for retrieving the program configuration."""

import contextlib
import functools
import importlib.machinery
import importlib.util
import logging
import os
import sys
from types import ModuleType
from typing import Any

from cotester import configdef


# Cache configuration module here
config_module = None

CONFIG_FILE = 'cotesterrc'

# Backend address used when neither the environment nor the config file supply one
DEFAULT_API_URL = 'http://localhost:8080'

# Config variables that override all others
overrides = {}


def config_dir() -> str:
    """Get the directory in which to store the configuration files."""
    if 'XDG_CONFIG_HOME' in os.environ:
        return os.environ['XDG_CONFIG_HOME']
    if 'HOME' in os.environ:
        return os.path.join(os.environ['HOME'], '.config')
    return '.'


def environ() -> dict[str, str]:
    """Return a dict with the config environment.

    This contains the process environment variables, plus the default config variables,
    plus the local config variables, plus a few guaranteed variables.
    The config variables all take precedence over the environment variables, so that an
    oddly-named environment variables doesn't override a configured value.

    API_URL is always present; the dashboard's NEXT_PUBLIC_API_URL is accepted in its place.
    """
    env = {**os.environ, **configdef.__dict__, **config().__dict__, **overrides}
    if 'XDG_CONFIG_HOME' not in env:
        env['XDG_CONFIG_HOME'] = config_dir()
    if 'API_URL' not in env:
        env['API_URL'] = env.get('NEXT_PUBLIC_API_URL', DEFAULT_API_URL)
    return env


def expandstr(var: str) -> str:
    """Expand a string with environment variables."""
    return var.format(**environ())


@functools.lru_cache(maxsize=None)
def get(var: str) -> Any:
    """Get a raw config variable."""
    return environ()[var]


@contextlib.contextmanager
def override_var(obj, name: str, value: Any):
    """Change an object variable within a with context.

    The original value of the attribute is restored on context exit.
    """
    saved_value = getattr(obj, name)
    setattr(obj, name, value)
    try:
        yield saved_value
    finally:
        setattr(obj, name, saved_value)


def config() -> ModuleType:
    """Return the configuration file as a module."""
    global config_module
    if config_module:
        return config_module

    configfn = os.path.join(config_dir(), CONFIG_FILE)
    if (os.access(configfn, os.R_OK)
        and (spec := importlib.util.spec_from_loader(
             'cotesterrc',
             importlib.machinery.SourceFileLoader(
                 'cotesterrc', configfn)))):
        config_module = importlib.util.module_from_spec(spec)

        # Don't write the imported config file bytecode file to eliminate caching problems
        with override_var(sys, 'dont_write_bytecode', True):
            spec.loader.exec_module(config_module)
    else:
        logging.info('Configuration file %s not found', configfn)
        config_module = ModuleType('empty')

    return config_module  # noqa: R504


def add_override(name: str, value: Any):
    """Add a config variable that overrides all others.

    Cached lookups are discarded so the new value is seen immediately.
    """
    overrides[name] = value
    get.cache_clear()
