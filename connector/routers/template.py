"""
Template router showing the public route conventions.
"""

from fastapi import APIRouter

router = APIRouter(tags=["template"])


@router.get("/template")
async def public_template_method():
    """A template method just to show the convention used."""
    return {"message": "This is a public template method, it doesn't do anything"}
