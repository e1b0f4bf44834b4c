"""
Form parsing - posted form data into domain models.
Blank inputs become None so optional columns are cleared rather than set to "".
"""

from datetime import datetime
from typing import Dict, Optional, Tuple, Type
from uuid import UUID

from aiohttp import web
from pydantic import BaseModel, TypeAdapter, ValidationError

from core.domain.models import (
    PlayerCreate, PlayerUpdate, PlayerStatCreate, TeamStatCreate, FixtureCreate, NewsCreate,
)
from core.services import NewsService
from locales import t

FIELD_LABELS = {
    "first_name": "First name",
    "last_name": "Last name",
    "player_number": "Number",
    "birth_date": "Birth date",
    "joined_date": "Joined",
    "match_date": "Date & time",
    "home_score": "Home score",
    "away_score": "Away score",
    "matches_played": "Matches played",
    "yellow_cards": "Yellow cards",
    "red_cards": "Red cards",
    "goals_for": "Goals for",
    "goals_against": "Goals against",
    "clean_sheets": "Clean sheets",
}

PLAYER_FIELDS = [
    "first_name", "last_name", "email", "player_number", "position", "birth_date",
    "height", "weight", "bio", "profile_image_url", "joined_date", "status",
]
FIXTURE_FIELDS = [
    "match_date", "opponent", "competition", "location", "home_score", "away_score",
    "status", "ticket_link", "notes", "opponent_logo_url",
]
PLAYER_STAT_FIELDS = ["season", "matches_played", "goals", "assists", "yellow_cards", "red_cards"]
TEAM_STAT_FIELDS = [
    "season", "matches_played", "wins", "draws", "losses", "goals_for", "goals_against", "clean_sheets",
]

_DATETIME = TypeAdapter(datetime)


def form_values(form, fields) -> Dict[str, Optional[str]]:
    """Stripped text values, blanks as None"""
    values = {}
    for name in fields:
        raw = form.get(name)
        if isinstance(raw, web.FileField) or raw is None:
            values[name] = None
            continue
        raw = str(raw).strip()
        values[name] = raw or None
    return values


def checkbox(form, name: str) -> bool:
    return form.get(name) in ("on", "true", "1", "yes")


def describe_errors(error: ValidationError) -> str:
    names = []
    for err in error.errors():
        loc = err.get("loc") or ("form",)
        label = FIELD_LABELS.get(str(loc[0]), str(loc[0]).replace("_", " ").capitalize())
        if label not in names:
            names.append(label)
    return t("form_invalid", fields=", ".join(names))


def parse(model: Type[BaseModel], data: Dict) -> Tuple[Optional[BaseModel], Optional[str]]:
    # Drop None so model defaults apply
    try:
        return model.model_validate({k: v for k, v in data.items() if v is not None}), None
    except ValidationError as e:
        return None, describe_errors(e)


def uploaded_image(form) -> Optional[Tuple[str, bytes]]:
    """(filename, bytes) of the image file input, None when nothing was chosen"""
    field = form.get("image")
    if not isinstance(field, web.FileField) or not field.filename:
        return None
    data = field.file.read()
    return (field.filename, data) if data else None


# === Per-form parsers ===

def parse_player(form, created_by: Optional[str] = None) -> Tuple[Optional[PlayerCreate], Optional[str], Dict]:
    values = form_values(form, PLAYER_FIELDS)
    player, error = parse(PlayerCreate, {**values, "created_by": created_by})
    return player, error, values


def player_update_from(player: PlayerCreate) -> PlayerUpdate:
    """Every form field is sent on edit so cleared inputs clear the column"""
    return PlayerUpdate(**player.model_dump(exclude={"created_by"}))


def parse_fixture(form, created_by: Optional[str] = None) -> Tuple[Optional[FixtureCreate], Optional[str], Dict]:
    values = form_values(form, FIXTURE_FIELDS)
    values["is_home_game"] = checkbox(form, "is_home_game")
    data = {**values, "created_by": created_by}
    data["competition"] = values["competition"] or ""
    data["location"] = values["location"] or ""
    fixture, error = parse(FixtureCreate, data)
    return fixture, error, values


def parse_player_stat(form, player_id: UUID, created_by: Optional[str] = None
                      ) -> Tuple[Optional[PlayerStatCreate], Optional[str], Dict]:
    values = form_values(form, PLAYER_STAT_FIELDS)
    stat, error = parse(PlayerStatCreate, {**values, "player_id": player_id, "created_by": created_by})
    return stat, error, values


def parse_team_stat(form, created_by: Optional[str] = None) -> Tuple[Optional[TeamStatCreate], Optional[str], Dict]:
    values = form_values(form, TEAM_STAT_FIELDS)
    stat, error = parse(TeamStatCreate, {**values, "created_by": created_by})
    return stat, error, values


def parse_news(form, created_by: Optional[str] = None) -> Tuple[Optional[NewsCreate], Optional[str], Dict]:
    values = form_values(form, ["title", "summary", "content", "category", "publish_date", "featured_image_url"])
    values["is_published"] = checkbox(form, "is_published")
    if not values["title"] or not values["content"]:
        return None, t("form_invalid", fields="Title, Content"), values

    publish_date = None
    if values["publish_date"]:
        try:
            publish_date = _DATETIME.validate_python(values["publish_date"])
        except ValidationError:
            return None, t("form_invalid", fields="Publish date"), values

    try:
        article = NewsService.prepare(
            title=values["title"],
            content=values["content"],
            summary=values["summary"] or "",
            category=values["category"],
            featured_image_url=values["featured_image_url"],
            is_published=values["is_published"],
            publish_date=publish_date,
            created_by=created_by,
        )
    except ValidationError as e:
        return None, describe_errors(e), values
    return article, None, values

