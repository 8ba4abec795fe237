"""Lookup of a CDN resource id by hostname."""

from typing import Iterable

from .errors import NotFoundError
from .models import CdnResource


def resolve_cdn_id(site: str, resources: Iterable[CdnResource]) -> str:
    """Return the id of the first resource whose cname matches *site*.

    Hostnames are compared case-insensitively. Duplicates are not detected;
    the first match in list order wins.

    Raises:
        NotFoundError: if no resource matches.
    """
    wanted = site.lower()
    for resource in resources:
        if resource.cname.lower() == wanted:
            return str(resource.id)
    raise NotFoundError()
