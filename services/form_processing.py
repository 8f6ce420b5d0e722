"""
Turns flat HTML form submissions into nested documents.

Field names use bracket notation, e.g. ``classes[0][number]`` and
``classes[0][date]`` become ``{'classes': [{'number': ..., 'date': ...}]}``.
A trailing ``[]`` (``tags[]``) collects every submitted value into a list.
"""

import re

_KEY_PATTERN = re.compile(r'^([^\[\]]+)((?:\[[^\[\]]*\])*)$')
_PART_PATTERN = re.compile(r'\[([^\[\]]*)\]')

IGNORED_FIELDS = {'csrf_token'}


def _clean(value):
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def _split_key(key):
    match = _KEY_PATTERN.match(key)
    if not match:
        return [key]
    return [match.group(1)] + _PART_PATTERN.findall(match.group(2))


def _listify(node):
    """Convert dicts keyed only by integers into lists ordered by index."""
    if isinstance(node, dict):
        node = {k: _listify(v) for k, v in node.items()}
        if node and all(k.isdigit() for k in node):
            return [node[k] for k in sorted(node, key=int)]
    return node


def create_document(form):
    """Build a nested document from a werkzeug MultiDict (or plain dict)."""
    document = {}
    items = form.lists() if hasattr(form, 'lists') else ((k, [v]) for k, v in form.items())

    for key, values in items:
        if key in IGNORED_FIELDS:
            continue
        parts = _split_key(key)
        append = parts[-1] == ''
        if append:
            parts = parts[:-1]

        node = document
        for part in parts[:-1]:
            node = node.setdefault(part, {})
            if not isinstance(node, dict):
                raise ValueError(f"Conflicting form field '{key}'")

        cleaned = [_clean(v) for v in values]
        if append:
            node[parts[-1]] = [v for v in cleaned if v is not None]
        else:
            node[parts[-1]] = cleaned[-1] if cleaned else None

    return _listify(document)
