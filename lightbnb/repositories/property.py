"""
Property repository for listing search and property creation.
Search statements are assembled from an ordered list of predicate builders.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union
import logging

from pydantic import ValidationError

from lightbnb.repositories.base import BaseRepository, coerce_int
from lightbnb.schemas.property import PropertyCreate, PropertySearchFilters
from lightbnb.utils.exceptions import MalformedInputError

logger = logging.getLogger(__name__)

# A fragment template with one "${}" slot for its placeholder number, and its value
Predicate = Tuple[str, Any]

SEARCH_SELECT = """
  SELECT properties.*, avg(property_reviews.rating) as average_rating
  FROM properties
  JOIN property_reviews ON properties.id = property_id
  """

ADD_PROPERTY = """
    INSERT INTO properties (owner_id, title, description, thumbnail_photo_url, cover_photo_url, cost_per_night, street, city, province, post_code, country, parking_spaces, number_of_bathrooms, number_of_bedrooms)
    VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11, $12, $13, $14)
    RETURNING *;
  """


def to_cents(amount: Decimal) -> int:
    """Convert whole currency units to integer cents."""
    return int((Decimal(amount) * 100).to_integral_value(rounding=ROUND_HALF_UP))


def _owner_predicate(filters: PropertySearchFilters) -> Optional[Predicate]:
    if filters.owner_id is not None:
        return "owner_id = ${}", filters.owner_id
    return None


def _city_predicate(filters: PropertySearchFilters) -> Optional[Predicate]:
    if filters.city is not None:
        return "city LIKE ${}", f"%{filters.city}%"
    return None


def _minimum_price_predicate(filters: PropertySearchFilters) -> Optional[Predicate]:
    if filters.minimum_price_per_night is not None:
        return "cost_per_night >= ${}", to_cents(filters.minimum_price_per_night)
    return None


def _maximum_price_predicate(filters: PropertySearchFilters) -> Optional[Predicate]:
    if filters.maximum_price_per_night is not None:
        return "cost_per_night <= ${}", to_cents(filters.maximum_price_per_night)
    return None


# WHERE predicates in emission order; minimum_rating is a HAVING clause instead
PREDICATE_BUILDERS: List[Callable[[PropertySearchFilters], Optional[Predicate]]] = [
    _owner_predicate,
    _city_predicate,
    _minimum_price_predicate,
    _maximum_price_predicate,
]


def parse_search_filters(
    options: Union[PropertySearchFilters, Mapping[str, Any], None]
) -> PropertySearchFilters:
    """
    Coerce a search option mapping into PropertySearchFilters.
    Unknown keys are ignored.

    Raises:
        MalformedInputError: If a value cannot be coerced to its filter type
    """
    if options is None:
        return PropertySearchFilters()
    if isinstance(options, PropertySearchFilters):
        return options
    try:
        return PropertySearchFilters.model_validate(dict(options))
    except ValidationError as e:
        raise MalformedInputError(f"invalid search options: {e}")


def build_property_search_query(
    filters: PropertySearchFilters,
    limit: int = 10
) -> Tuple[str, List[Any]]:
    """
    Assemble the property search statement and its parameters.

    Each emitted predicate references its value by the parameter count at the
    time it was appended. WHERE precedes the first emitted predicate and AND
    every later one. The limit is always the last parameter.

    Args:
        filters: Parsed search filters
        limit: Maximum number of rows

    Returns:
        (statement, parameters) tuple
    """
    parameters: List[Any] = []
    clauses: List[str] = []

    for builder in PREDICATE_BUILDERS:
        predicate = builder(filters)
        if predicate is None:
            continue
        template, value = predicate
        parameters.append(value)
        keyword = "AND" if clauses else "WHERE"
        clauses.append(f"{keyword} {template.format(len(parameters))}")

    statement = SEARCH_SELECT
    if clauses:
        statement += " ".join(clauses)

    statement += """
  GROUP BY properties.id
  """

    if filters.minimum_rating is not None:
        parameters.append(filters.minimum_rating)
        statement += f"HAVING avg(rating) >= ${len(parameters)}"

    parameters.append(limit)
    statement += f"""
  ORDER BY cost_per_night
  LIMIT ${len(parameters)};
  """

    return statement, parameters


class PropertyRepository(BaseRepository):
    """Repository for property search and creation."""

    async def get_all_properties(
        self,
        options: Union[PropertySearchFilters, Mapping[str, Any], None] = None,
        limit: int = 10
    ) -> List[Dict[str, Any]]:
        """
        Search properties, cheapest first.

        Args:
            options: Search filters (owner_id, city, minimum_price_per_night,
                     maximum_price_per_night, minimum_rating)
            limit: Maximum number of properties to return

        Returns:
            Property rows, each with an average_rating field. Properties
            without reviews never appear.

        Raises:
            MalformedInputError: If a filter value has the wrong type
        """
        filters = parse_search_filters(options)
        statement, parameters = build_property_search_query(filters, coerce_int(limit, "limit"))
        logger.debug(f"Property search statement: {statement.strip()} parameters: {parameters}")
        return await self.fetch_all("get_all_properties", statement, parameters)

    async def add_property(self, property: Union[PropertyCreate, Mapping[str, Any]]) -> Dict[str, Any]:
        """
        Add a property to the database.
        cost_per_night is stored as given, in cents.

        Args:
            property: All fourteen property fields

        Returns:
            The inserted property row, including its generated id
        """
        if not isinstance(property, PropertyCreate):
            try:
                property = PropertyCreate.model_validate(dict(property))
            except ValidationError as e:
                raise MalformedInputError(f"invalid property record: {e}")

        created = await self.fetch_one("add_property", ADD_PROPERTY, property.insert_values())
        logger.info(f"Created property: {created['title']} (ID: {created['id']})")
        return created
