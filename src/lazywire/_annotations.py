from __future__ import annotations

import re


# marker, type token, name token, quoted identifier
_PARAM_TAG = re.compile(r'[:@]param\b(?:\s+([^\s$"][^\s:]*))?(?:\s+\$?(\w+))?:?(?:\s+"([^"]+)")?')


def extract_param_annotations(doc: str | None) -> list[str | None]:
    """Get the identifier overrides for the constructor parameters from a docstring.

    Both reST and phpdoc style tags are understood:

      :param ColorInterface color:
      :param int hue: "config.hue" The hue setting
      @param int $hue "config.hue"

    The result is indexed by tag position, not by parameter name. A tag without a
    quoted identifier yields `None`. Tags are expected to follow the parameter
    order of the constructor; missing or reordered tags misalign silently.
    """
    if not doc:
        return []

    return [match.group(3) or None for match in _PARAM_TAG.finditer(doc)]
