"""REST API over an Elasticsearch product index: CRUD, search, facets and autocomplete."""

__version__ = "1.0.0"
