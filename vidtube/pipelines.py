"""Reusable aggregation stages for the read models.

Joins against ``users`` only ever project the public profile fields, and
many-to-one joins are collapsed from a one-element array to an object.
"""

import math

from pymongo.collection import Collection

from vidtube.database import USERS
from vidtube.models.common import Page

PUBLIC_USER_FIELDS = {"username": 1, "fullName": 1, "avatar": 1}


def first(field: str) -> dict:
    return {"$first": f"${field}"}


def owner_lookup(extra_stages: list[dict] | None = None, project: dict | None = None) -> list[dict]:
    """Join the owning user and collapse it to a single object."""
    return [
        {
            "$lookup": {
                "from": USERS,
                "localField": "owner",
                "foreignField": "_id",
                "as": "owner",
                "pipeline": [*(extra_stages or []), {"$project": project or PUBLIC_USER_FIELDS}],
            },
        },
        {"$addFields": {"owner": first("owner")}},
    ]


def join(source: str, local_field: str, foreign_field: str, as_field: str, pipeline: list[dict] | None = None) -> dict:
    lookup = {
        "from": source,
        "localField": local_field,
        "foreignField": foreign_field,
        "as": as_field,
    }
    if pipeline:
        lookup["pipeline"] = pipeline
    return {"$lookup": lookup}


def contains(value, array_field: str) -> dict:
    """Boolean expression: is value one of the entries of array_field."""
    return {"$cond": {"if": {"$in": [value, f"${array_field}"]}, "then": True, "else": False}}


def newest_first() -> dict:
    return {"$sort": {"createdAt": -1}}


def paginate(collection: Collection, pipeline: list[dict], page: int = 1, limit: int = 10) -> Page:
    """Run pipeline and return one page of it plus paging metadata."""
    page = max(page, 1)
    limit = max(limit, 1)
    facet = {
        "$facet": {
            "docs": [{"$skip": (page - 1) * limit}, {"$limit": limit}],
            "total": [{"$count": "count"}],
        },
    }
    results = list(collection.aggregate([*pipeline, facet]))
    result = results[0] if results else {"docs": [], "total": []}
    total_docs = result["total"][0]["count"] if result["total"] else 0
    total_pages = math.ceil(total_docs / limit) or 1
    has_prev = page > 1
    has_next = page < total_pages
    return Page(
        docs=result["docs"],
        total_docs=total_docs,
        limit=limit,
        page=page,
        total_pages=total_pages,
        paging_counter=(page - 1) * limit + 1,
        has_prev_page=has_prev,
        has_next_page=has_next,
        prev_page=page - 1 if has_prev else None,
        next_page=page + 1 if has_next else None,
    )
