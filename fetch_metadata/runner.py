"""
Single boot-time pass: for every provider fetch each attribute from the
metadata service and write it below the configuration root.

A failing attribute is logged and skipped; only a configuration root that
cannot be created or entered stops the run.
"""

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import requests

from .attributes import Attribute, Provider, load_providers, resolve_attributes
from .exceptions import FatalSetupError, MetadataError
from .fetcher import fetch
from .log import configure_logging
from .materializer import materialize


log = logging.getLogger(__name__)

CONFIG_ROOT = Path('/run/config')
CONFIG_ROOT_MODE = 0o755

PROVIDER_ORDER = ('gcp', 'aws')


@dataclass(frozen=True)
class AttributeResult:
    provider: str
    attribute: Attribute
    error: Optional[MetadataError] = None

    @property
    def ok(self):
        return self.error is None


def prepare_config_root(root):
    try:
        os.makedirs(root, CONFIG_ROOT_MODE, exist_ok=True)
    except OSError as e:
        raise FatalSetupError(f'unable to create config dir {root}: {e}') from e
    try:
        os.chdir(root)
    except OSError as e:
        raise FatalSetupError(f'unable to change current dir {root}: {e}') from e


def fetch_attribute(session, provider: Provider, attribute: Attribute) -> AttributeResult:
    log.info('%s: get %s -> %s', provider.label, attribute.key, attribute.file)
    try:
        body = fetch(session, provider.url, attribute.key, provider.headers)
        materialize(body, attribute.file, attribute.mode)
    except MetadataError as e:
        log.error('%s: %s', provider.label, e)
        return AttributeResult(provider.name, attribute, e)
    return AttributeResult(provider.name, attribute)


def run(providers, environ=None, session=None) -> List[AttributeResult]:
    """Fetch every attribute of every provider in PROVIDER_ORDER, in order."""
    own_session = session is None
    if own_session:
        session = requests.Session()

    results = []
    try:
        for name in PROVIDER_ORDER:
            provider = providers[name]
            for attribute in resolve_attributes(provider, environ):
                results.append(fetch_attribute(session, provider, attribute))
    finally:
        if own_session:
            session.close()
    return results


def main():
    configure_logging()
    providers = load_providers()

    try:
        prepare_config_root(CONFIG_ROOT)
    except FatalSetupError as e:
        print(e, file=sys.stderr)
        return 1

    run(providers)
    return 0
