"""
Community Router — QuantHub
---------------------------
Per-author contribution summaries computed server-side from the
`strategies` and `datasets` tables.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from analytics.community import filter_members, sort_members
from analytics.providers import ClientSideSummaryProvider
from backend.deps import get_store
from supabase_client.errors import ErrorKind, StoreError

router = APIRouter(prefix="/community", tags=["community"])


class CommunityMemberSchema(BaseModel):
    email: str
    strategies: int
    datasets: int
    total_contributions: int
    last_active: str
    joined_date: str
    display_name: str


class CommunityResponse(BaseModel):
    count: int
    total: int
    results: List[CommunityMemberSchema]


class MemberProfileSchema(CommunityMemberSchema):
    strategy_rows: List[Dict[str, Any]]
    dataset_rows: List[Dict[str, Any]]


@router.get("", response_model=CommunityResponse)
def list_members(
    sort: str = Query("contributions", description="contributions | strategies | datasets | recent | name"),
    filter: str = Query("all", description="all | strategies | datasets"),
    q: Optional[str] = Query(None, description="Search display name or email"),
    store=Depends(get_store),
):
    members = ClientSideSummaryProvider(store).summaries()
    try:
        shown = sort_members(filter_members(members, search=q, only=filter), by=sort)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {
        "count": len(shown),
        "total": len(members),
        "results": [m.as_dict() for m in shown],
    }


@router.get("/{email}", response_model=MemberProfileSchema)
def get_member(email: str, store=Depends(get_store)):
    profile = ClientSideSummaryProvider(store).profile(email)
    if profile.member.total_contributions == 0:
        raise StoreError(ErrorKind.NOT_FOUND, "This user profile could not be loaded.")
    return profile.as_dict()
