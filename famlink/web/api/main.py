"""FastAPI application exposing famlink relationship suggestions."""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from typing import List, Dict, Optional, Any, Union
from datetime import date
import logging

from ... import __version__
from ...config import SuggestionConfig, default_config
from ...core.member import Member
from ...data import nationality_to_iso, nationality_to_emoji
from ...matching import MatchScorer, RelationClassifier, SuggestionRanker
from ...search import search_members
from ...stats import (
    surname_distribution,
    birth_country_distribution,
    nationality_distribution,
    tree_summary,
    upcoming_birthdays,
)

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="famlink API",
    description="Relationship suggestions for family tree members",
    version=__version__,
)

# Add CORS middleware to allow the web front end to access the API
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

scorer = MatchScorer()
classifier = RelationClassifier()


# Pydantic models for API
class BirthPlaceDocument(BaseModel):
    city: Optional[str] = None
    country: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None


class MemberDocument(BaseModel):
    """A member as stored by the document database (camelCase keys)."""
    id: str
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    birthDate: Optional[Union[int, float, str]] = None
    birthPlace: Optional[Union[BirthPlaceDocument, str]] = None
    nationality: Optional[Union[List[str], str]] = None
    parentsIds: Optional[List[str]] = None
    childrenIds: Optional[List[str]] = None
    brothersIds: Optional[List[str]] = None
    treeId: Optional[str] = None
    gender: Optional[str] = None
    deathDate: Optional[Union[int, float, str]] = None

    def to_member(self) -> Member:
        return Member.from_dict(self.model_dump())


class SuggestionRequest(BaseModel):
    member: MemberDocument
    members: List[MemberDocument]
    limit: Optional[int] = Field(default=None, ge=0)
    locale: str = default_config.locale


class RelationRequest(BaseModel):
    member: MemberDocument
    other: MemberDocument
    locale: str = default_config.locale


class TreeRequest(BaseModel):
    members: List[MemberDocument]
    today: Optional[date] = None


class SearchRequest(BaseModel):
    members: List[MemberDocument]
    term: str
    limit: Optional[int] = Field(default=10, ge=0)
    exclude_ids: List[str] = []


@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


@app.post("/api/suggestions")
async def suggestions(request: SuggestionRequest) -> Dict[str, Any]:
    """Rank the members of a tree as probable relatives of a new member."""
    new_member = request.member.to_member()
    members = [doc.to_member() for doc in request.members]

    config = SuggestionConfig(max_results=request.limit, locale=request.locale)
    results = SuggestionRanker(scorer=scorer, classifier=classifier, config=config).top(
        new_member, members
    )

    logger.info(f"{len(results)} suggestion(s) for member {new_member.id} out of {len(members)} candidates")

    return {
        "member_id": new_member.id,
        "suggestions": [r.to_dict(request.locale) for r in results],
    }


@app.post("/api/relation")
async def relation(request: RelationRequest) -> Dict[str, Any]:
    """Explain the score and probable relation between two members."""
    new_member = request.member.to_member()
    other = request.other.to_member()

    label = classifier.classify(new_member, other)
    breakdown = scorer.explain(new_member, other)

    return {
        "relation": label.value,
        "relation_label": label.display_name(request.locale),
        "score": breakdown.score,
        "same_last_name": breakdown.same_last_name,
        "same_nationality": breakdown.same_nationality,
        "same_birth_period_and_place": breakdown.same_birth_period_and_place,
        "shared_relatives": breakdown.shared_relatives,
        "rules": breakdown.rules,
    }


@app.post("/api/trees/stats")
async def tree_stats(request: TreeRequest) -> Dict[str, Any]:
    """Summary and distributions for a tree."""
    members = [doc.to_member() for doc in request.members]

    return {
        "summary": tree_summary(members).to_dict(),
        "surnames": [e.to_dict() for e in surname_distribution(members)],
        "birth_countries": [e.to_dict() for e in birth_country_distribution(members)],
        "nationalities": [e.to_dict() for e in nationality_distribution(members)],
        "upcoming_birthdays": [b.to_dict() for b in upcoming_birthdays(members, today=request.today)],
    }


@app.post("/api/members/search")
async def member_search(request: SearchRequest) -> Dict[str, Any]:
    """Search members by name for the member picker."""
    members = [doc.to_member() for doc in request.members]
    results = search_members(members, request.term, exclude_ids=request.exclude_ids, limit=request.limit)
    return {"results": [m.to_dict() for m in results]}


@app.get("/api/nationalities/{name}")
async def nationality(name: str) -> Dict[str, str]:
    """ISO code and flag for a nationality name."""
    code = nationality_to_iso(name)
    if code is None:
        raise HTTPException(status_code=404, detail=f"Unknown nationality: {name}")
    return {"nationality": name, "iso": code, "flag": nationality_to_emoji(name)}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
