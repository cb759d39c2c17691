# src/fixtura/__init__.py
"""fixtura: randomly populated instances of arbitrary types for test fixtures.

Scalars come straight from primitive generators; composite types are
built by reflecting over their constructor fields, with restrictions to
override any property, path, subtype, type or collection size.

Usage:
    from fixtura import random_instance_of, random_string, with_path, exclude_property

    name = random_string(10)
    person = random_instance_of(
        Person,
        with_path("person.address.postcode", "SW1A 1AA"),
        exclude_property("middle_name"),
    )
"""

from fixtura.builder import (
    InstanceOf,
    build_instance,
    instance_factory_for,
    random_array_of,
    random_array_of_enum,
    random_collection_of,
    random_instance_of,
    random_list_of,
)
from fixtura.configuration import BuildConfiguration, ConfigurationState
from fixtura.errors import (
    ConfigurationConsumedError,
    ConstructionError,
    EmptyDomainError,
    FixturaError,
    PopulationError,
    ValueFactoryError,
)
from fixtura.factories import (
    ArrayOf,
    EnumOf,
    FixedValue,
    OneOf,
    ScalarFactory,
    ValueFactory,
    one_of_values,
    the_value,
)
from fixtura.primitives import (
    one_of,
    random_boolean,
    random_byte,
    random_byte_array,
    random_char,
    random_date,
    random_decimal,
    random_double,
    random_enum,
    random_float,
    random_instant,
    random_int,
    random_local_date,
    random_local_datetime,
    random_local_time,
    random_long,
    random_short,
    random_string,
    random_zoned_datetime,
)
from fixtura.restrictions import (
    Restriction,
    collection_size,
    collection_size_for_path,
    collection_size_for_property,
    exclude_path,
    exclude_property,
    factory,
    subtype,
    with_path,
    with_property,
)
from fixtura.settings import DEFAULT_SETTINGS, PopulationSettings, load_settings
from fixtura.sizes import SizeRange

__all__ = [
    "DEFAULT_SETTINGS",
    "ArrayOf",
    "BuildConfiguration",
    "ConfigurationConsumedError",
    "ConfigurationState",
    "ConstructionError",
    "EmptyDomainError",
    "EnumOf",
    "FixedValue",
    "FixturaError",
    "InstanceOf",
    "OneOf",
    "PopulationError",
    "PopulationSettings",
    "Restriction",
    "ScalarFactory",
    "SizeRange",
    "ValueFactory",
    "ValueFactoryError",
    "build_instance",
    "collection_size",
    "collection_size_for_path",
    "collection_size_for_property",
    "exclude_path",
    "exclude_property",
    "factory",
    "instance_factory_for",
    "load_settings",
    "one_of",
    "one_of_values",
    "random_array_of",
    "random_array_of_enum",
    "random_boolean",
    "random_byte",
    "random_byte_array",
    "random_char",
    "random_collection_of",
    "random_date",
    "random_decimal",
    "random_double",
    "random_enum",
    "random_float",
    "random_instance_of",
    "random_instant",
    "random_int",
    "random_list_of",
    "random_local_date",
    "random_local_datetime",
    "random_local_time",
    "random_long",
    "random_short",
    "random_string",
    "random_zoned_datetime",
    "subtype",
    "the_value",
    "with_path",
    "with_property",
]
