"""
Shared fixtures: the bundled catalog and a service over it.
"""

import pytest


@pytest.fixture(scope="session")
def catalog():
    from ucumkit.catalog import load_catalog
    return load_catalog()


@pytest.fixture(scope="session")
def ucum(catalog):
    from ucumkit.service import UcumService
    return UcumService(catalog=catalog)


def minimal_catalog(extra_units=()):
    """Catalog with the seven base units, kilo, and any extra unit dicts."""
    from ucumkit.catalog import catalog_from_dict

    raw = {
        'prefixes': [
            {'code': 'k', 'capital': 'K', 'name': 'kilo', 'value': '1e3', 'exponent': 3},
        ],
        'base_units': [
            {'code': code, 'capital': code.upper(), 'name': code, 'property': code}
            for code in ('m', 's', 'g', 'rad', 'K', 'C', 'cd')
        ],
        'units': list(extra_units),
    }
    return catalog_from_dict(raw)
