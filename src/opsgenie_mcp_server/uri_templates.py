"""Resource URI templates with named path and query placeholders.

``opsgenie://alerts/{alertId}/notes`` binds ``alertId`` to one path segment;
``opsgenie://search?query={query}`` binds ``query`` to a query-string key.
When a query key appears more than once in a URI the first occurrence wins.
"""

from __future__ import annotations

import re
from urllib.parse import parse_qs, quote, unquote, urlencode

_PLACEHOLDER = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")


class UriTemplate:
    def __init__(self, template: str):
        self.template = template
        path, _, query = template.partition("?")
        self._path_template = path

        self._path_variables = _PLACEHOLDER.findall(path)
        pattern = ""
        position = 0
        for match in _PLACEHOLDER.finditer(path):
            pattern += re.escape(path[position : match.start()])
            pattern += f"(?P<{match.group(1)}>[^/?#]+)"
            position = match.end()
        pattern += re.escape(path[position:])
        self._path_regex = re.compile(f"^{pattern}$")

        # query variables: key -> variable name
        self._query_variables: dict[str, str] = {}
        for pair in filter(None, query.split("&")):
            key, _, value = pair.partition("=")
            placeholder = _PLACEHOLDER.fullmatch(value)
            if placeholder is None:
                raise ValueError(f"Query part of URI template must be key={{name}}: {template!r}")
            self._query_variables[key] = placeholder.group(1)

    def __repr__(self) -> str:
        return f"UriTemplate({self.template!r})"

    @property
    def variables(self) -> list[str]:
        return self._path_variables + list(self._query_variables.values())

    @property
    def path_variables(self) -> list[str]:
        return list(self._path_variables)

    @property
    def is_static(self) -> bool:
        return not self.variables

    @property
    def rfc6570(self) -> str:
        """The template with its query part in RFC 6570 form, e.g. ``opsgenie://search{?query}``.

        Query keys are named after their variables.
        """
        if not self._query_variables:
            return self._path_template
        return f"{self._path_template}{{?{','.join(self._query_variables.values())}}}"

    def match(self, uri: str) -> dict[str, str | None] | None:
        """Extract placeholder values from ``uri``, or return None when it does not fit.

        Path values are percent-decoded. A query placeholder whose key is
        missing from the URI is returned as None.
        """
        path, has_query, query = uri.partition("?")
        if has_query and not self._query_variables:
            return None

        path_match = self._path_regex.match(path)
        if path_match is None:
            return None

        params: dict[str, str | None] = {
            name: unquote(value) for name, value in path_match.groupdict().items()
        }
        if self._query_variables:
            parsed = parse_qs(query, keep_blank_values=True)
            for key, name in self._query_variables.items():
                values = parsed.get(key)
                params[name] = values[0] if values else None
        return params

    def expand(self, **values: str) -> str:
        """Build a URI from placeholder values, percent-encoding each one."""
        missing = [name for name in self.variables if name not in values]
        if missing:
            raise KeyError(f"Missing values for URI template {self.template!r}: {missing}")

        uri = _PLACEHOLDER.sub(
            lambda m: quote(str(values[m.group(1)]), safe=""), self._path_template
        )
        if self._query_variables:
            uri += "?" + urlencode(
                [(key, values[name]) for key, name in self._query_variables.items()],
                quote_via=quote,
            )
        return uri
