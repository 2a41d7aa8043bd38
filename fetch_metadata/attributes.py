"""
Attribute registry.

Each provider maps remote metadata keys to local files. The built-in table
lives in ``providers.yaml``; extra attributes can be declared at boot with
environment variables such as ``GCP_FOO=attributes/custom,custom/path,0640``.
"""

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, NamedTuple, Optional, Tuple

import yaml

from .exceptions import MalformedEnvironmentValue, ModeParseError


log = logging.getLogger(__name__)

PROVIDERS_FILE = Path(__file__).with_name('providers.yaml')

ENV_PATTERN = re.compile(r'^([\w\-_/]+),([\w\-_/.]+),(\d{4})', re.ASCII)


class Header(NamedTuple):
    name: str
    value: str


class Attribute(NamedTuple):
    key: str
    file: str
    mode: int


@dataclass(frozen=True)
class Provider:
    name: str
    label: str
    url: str
    prefix: str
    headers: Tuple[Header, ...] = ()
    attributes: Tuple[Attribute, ...] = ()


def parse_mode(text):
    try:
        return int(text, 8)
    except (TypeError, ValueError) as e:
        raise ModeParseError(f'invalid mode {text!r}: {e}') from e


def parse_environment_value(value):
    match = ENV_PATTERN.fullmatch(value)
    if match is None:
        raise MalformedEnvironmentValue(value)
    key, file, mode = match.groups()
    return Attribute(key, file, parse_mode(mode))


def resolve_environment_attributes(prefix, environ=None) -> Tuple[Attribute, ...]:
    """
    Collect the attributes declared by environment variables starting with
    ``prefix``. Values that are not ``key,file,mode`` are ignored; values with
    an unparseable mode are logged and left out.
    """
    if not prefix:
        raise ValueError('environment prefix must not be empty')
    if environ is None:
        environ = os.environ

    attributes = []
    for name, value in environ.items():
        if not name.startswith(prefix):
            continue
        try:
            attributes.append(parse_environment_value(value))
        except MalformedEnvironmentValue:
            continue
        except ModeParseError as e:
            log.error('unable to parse mode for env %s=%s: %s', name, value, e)
    return tuple(attributes)


def resolve_attributes(provider, environ=None) -> Tuple[Attribute, ...]:
    return provider.attributes + resolve_environment_attributes(provider.prefix, environ)


def _provider_from_entry(name, entry):
    headers = tuple(
        Header(str(header), str(value))
        for header, value in (entry.get('headers') or {}).items()
    )
    attributes = tuple(
        Attribute(item['key'], item['file'], parse_mode(str(item['mode'])))
        for item in entry.get('attributes') or ()
    )
    return Provider(
        name=name,
        label=entry.get('label', name.upper()),
        url=entry['url'],
        prefix=entry['prefix'],
        headers=headers,
        attributes=attributes,
    )


def load_providers(path: Optional[Path] = None) -> Dict[str, Provider]:
    path = Path(path or PROVIDERS_FILE)
    table = yaml.safe_load(path.read_text()) or {}
    return {name: _provider_from_entry(name, entry) for name, entry in table.items()}
