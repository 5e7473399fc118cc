"""Named scalar domains, looked up by the CLI and notation helpers."""

from normival.core.scalars import (
    INTEGER_BITS,
    INTEGERS,
    DateDomain,
    IntegerDomain,
    PassThroughDomain,
    ScalarDomain,
)

_DOMAINS: dict[str, ScalarDomain] = {
    "int": INTEGERS,
    "nat": IntegerDomain(signed=False),
    "date": DateDomain(),
    "float": PassThroughDomain(value_type="float"),
    "str": PassThroughDomain(value_type="str"),
    "decimal": PassThroughDomain(value_type="decimal"),
    "datetime": PassThroughDomain(value_type="datetime"),
    "any": PassThroughDomain(value_type="any"),
}
for _bits in INTEGER_BITS:
    _DOMAINS[f"i{_bits}"] = IntegerDomain(bits=_bits, signed=True)
    _DOMAINS[f"u{_bits}"] = IntegerDomain(bits=_bits, signed=False)


def domain_names() -> list[str]:
    return sorted(_DOMAINS)


def get_domain(name: str) -> ScalarDomain:
    """Return the preset domain registered under ``name``."""
    domain = _DOMAINS.get(name.strip().lower())
    if domain is None:
        raise ValueError(
            f"Unknown domain '{name}'. Valid: {', '.join(domain_names())}"
        )
    return domain
