"""
TestLink catalog handling: loading catalog files and matching report keys
against the key custom field of each catalog test case.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional

import yaml

from .models import CatalogTestCase, CustomField

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """Raised when a catalog file cannot be loaded."""


def key_value(test_case: CatalogTestCase, key_custom_field: str) -> Optional[str]:
    """Value of the key custom field of a catalog test case, if it has one."""
    cf = test_case.custom_field(key_custom_field)
    return cf.value if cf else None


def find_catalog_entry(catalog: Iterable[CatalogTestCase], key: str,
                       key_custom_field: str) -> Optional[CatalogTestCase]:
    """Return the first catalog test case whose key custom field equals ``key``."""
    for test_case in catalog:
        value = key_value(test_case, key_custom_field)
        if value is not None and value == key:
            return test_case
    return None


class KeyIndex:
    """Lookup table from key custom field value to catalog test case."""

    def __init__(self, catalog: Iterable[CatalogTestCase], key_custom_field: str,
                 log: Optional[logging.Logger] = None):
        self.key_custom_field = key_custom_field
        self.logger = log or logger
        self._entries: dict[str, CatalogTestCase] = {}
        for test_case in catalog:
            value = key_value(test_case, key_custom_field)
            if value is None:
                self.logger.debug(f"Test case {test_case.id} has no '{key_custom_field}' custom field")
                continue
            if value in self._entries:
                self.logger.warning(
                    f"Test cases {self._entries[value].id} and {test_case.id} share key "
                    f"'{value}'; only {self._entries[value].id} will be matched")
                continue
            self._entries[value] = test_case

    def find(self, key: str) -> Optional[CatalogTestCase]:
        return self._entries.get(key)

    def __len__(self):
        return len(self._entries)


def _custom_fields(raw) -> tuple[CustomField, ...]:
    if raw is None:
        return ()
    if isinstance(raw, dict):
        # A null value means the field is unset; it must never match a key.
        return tuple(CustomField(str(k), str(v)) for k, v in raw.items() if v is not None)
    if isinstance(raw, list):
        fields = []
        for item in raw:
            if not isinstance(item, dict) or 'name' not in item:
                raise CatalogError(f"Invalid custom field: {item!r}")
            if item.get('value') is None:
                continue
            fields.append(CustomField(str(item['name']), str(item['value'])))
        return tuple(fields)
    raise CatalogError(f"Invalid custom fields: {raw!r}")


def _test_case(raw) -> CatalogTestCase:
    if not isinstance(raw, dict) or 'id' not in raw:
        raise CatalogError(f"Catalog test case without id: {raw!r}")
    try:
        tc_id = int(raw['id'])
    except (TypeError, ValueError) as e:
        raise CatalogError(f"Invalid test case id {raw['id']!r}") from e
    external_id = raw.get('external_id')
    return CatalogTestCase(
        id=tc_id,
        name=str(raw.get('name') or ''),
        custom_fields=_custom_fields(raw.get('custom_fields')),
        external_id=str(external_id) if external_id is not None else None,
    )


def load_catalog(path) -> list[CatalogTestCase]:
    """
    Load catalog test cases from a YAML (or JSON) file.

    The document is either a list of test cases or a mapping with a
    ``test_cases`` list. Each test case needs an ``id``; ``custom_fields``
    is a mapping of name to value or a list of ``{name, value}`` items.
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise CatalogError(f"Cannot read catalog {path}: {e}") from e
    except yaml.YAMLError as e:
        raise CatalogError(f"Invalid catalog {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get('test_cases')
    if data is None:
        data = []
    if not isinstance(data, list):
        raise CatalogError(f"Catalog {path} must contain a list of test cases")

    catalog = [_test_case(item) for item in data]
    logger.info(f"Loaded {len(catalog)} test cases from {Path(path).name}")
    return catalog
