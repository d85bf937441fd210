"""Load question banks, career catalogs and answer files from disk.

Three bank layouts are understood:

- the canonical layout, a dump of :class:`QuestionBank` (``modules`` is a list);
- the pro layout, where ``modules`` is an object keyed by module name and the
  personality modules are nested under ``modules.personality``;
- the free-tier layout, a bare list of yes/no items with an optional boolean
  ``answer``.

Legacy layouts are converted item by item so that every item keeps its slot
in the answer vector, even when it cannot be scored.
"""

import json
import logging
import math
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import ValidationError

from .exceptions import CatalogLoadError, QuestionBankLoadError
from .schema import (
    CareerCatalog,
    LikertScale,
    LocalizedText,
    QuestionBank,
    QuestionItem,
    QuestionModule,
    ScaleKind,
    Tier,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# Module order of the pro layout; answers are laid out in this order.
PRO_MODULE_ORDER = ("metaIntelligence", "interests8")
PRO_PERSONALITY_ORDER = ("big5", "enneagram", "mbti", "composite")


# Errors raised while reading and parsing a data file
READ_ERRORS = (OSError, UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError)


def read_data_file(path: PathLike) -> Any:
    """Read a JSON or YAML file, choosing the parser by suffix."""
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        if path.suffix.lower() in (".yaml", ".yml"):
            return yaml.safe_load(f)
        return json.load(f)


# =============================================================================
# Question banks
# =============================================================================


def load_question_bank(path: PathLike, module_key: Optional[str] = None) -> QuestionBank:
    """Load a question bank in any supported layout.

    Args:
        path: JSON or YAML file.
        module_key: Module key for a free-tier list file (defaults to the file stem).

    Raises:
        QuestionBankLoadError: If the file is unreadable or malformed.
    """
    path = Path(path)
    try:
        data = read_data_file(path)
    except READ_ERRORS as e:
        raise QuestionBankLoadError(f"Cannot read question bank {path}: {e}") from e

    try:
        bank = parse_question_bank(data, module_key=module_key or path.stem)
    except ValidationError as e:
        raise QuestionBankLoadError(f"Invalid question bank {path}: {e}") from e

    logger.info(
        "Loaded question bank %s: %d modules, %d items",
        path, len(bank.modules), bank.answer_length,
    )
    return bank


def parse_question_bank(data: Any, module_key: str = "items") -> QuestionBank:
    """Build a QuestionBank from already-parsed file content."""
    if isinstance(data, list):
        return QuestionBank(
            name=module_key,
            modules=[parse_binary_module(data, module_key)],
        )

    if not isinstance(data, dict):
        raise QuestionBankLoadError("Question bank must be a JSON object or array")

    modules = data.get("modules")
    if isinstance(modules, list):
        return QuestionBank.model_validate(data)
    if isinstance(modules, dict):
        return parse_pro_bank(data)

    raise QuestionBankLoadError("Question bank has no 'modules'")


def parse_binary_module(
    items: list,
    key: str,
    tier: Tier = Tier.TRADITIONAL,
) -> QuestionModule:
    """Convert free-tier yes/no items.

    Items carrying a boolean ``answer`` are ability items scored against that
    answer; everything else is scored by endorsement.
    """
    parsed = []
    for idx, raw in enumerate(items):
        raw = raw if isinstance(raw, dict) else {}
        expected = raw.get("answer")
        if isinstance(expected, bool):
            kind = ScaleKind.BINARY_EXPECTED
        else:
            kind = ScaleKind.BINARY_ENDORSEMENT
            expected = None
        dimension = str(raw.get("dimension") or "")
        parsed.append(QuestionItem(
            id=str(raw.get("id", idx + 1)),
            dimension=dimension,
            scale_kind=kind,
            expected_answer=expected,
            text=_localized(raw.get("stem") or raw),
            scored=bool(dimension),
        ))
    return QuestionModule(key=key, tier=tier, items=parsed)


def _object_field(data: dict, key: str) -> dict:
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise QuestionBankLoadError(f"'{key}' must be an object, got {type(value).__name__}")
    return value


def parse_pro_bank(data: dict) -> QuestionBank:
    """Convert the pro layout into a canonical bank."""
    raw_modules = data.get("modules") or {}
    personality = _object_field(raw_modules, "personality")

    modules = []
    for key in PRO_MODULE_ORDER:
        modules.append(_weighted_module(key, _items_of(raw_modules.get(key)), _plain_item))

    converters = {
        "big5": _plain_item,
        "enneagram": _enneagram_item,
        "mbti": _mbti_item,
        "composite": _composite_item,
    }
    for key in PRO_PERSONALITY_ORDER:
        modules.append(_weighted_module(key, _items_of(personality.get(key)), converters[key]))

    raw_scale = _object_field(data, "scale")
    scale = LikertScale(
        scores=raw_scale.get("scores") or LikertScale().scores,
        labels=raw_scale.get("labels") or {},
    )
    return QuestionBank(
        name=str(data.get("name") or "pro"),
        version=str(data.get("version") or "1.0.0"),
        scale=scale,
        modules=modules,
    )


def _items_of(raw_module: Any) -> list:
    if isinstance(raw_module, dict) and isinstance(raw_module.get("items"), list):
        return raw_module["items"]
    return []


def _weighted_module(key: str, raw_items: list, convert) -> QuestionModule:
    items = []
    for idx, raw in enumerate(raw_items):
        raw = raw if isinstance(raw, dict) else {}
        item_id = str(raw.get("id") or f"{key}-{idx + 1}")
        items.append(convert(item_id, raw))
    skipped = sum(1 for it in items if not it.scored)
    if skipped:
        logger.warning("Module %s: %d items have no dimension and will not be scored", key, skipped)
    return QuestionModule(key=key, tier=Tier.POTENTIAL, items=items)


def _plain_item(item_id: str, raw: dict) -> QuestionItem:
    dimension = str(raw.get("dim") or "")
    return QuestionItem(
        id=item_id,
        dimension=dimension,
        text=_localized(raw),
        scored=bool(dimension),
    )


def _enneagram_item(item_id: str, raw: dict) -> QuestionItem:
    enneagram_type = raw.get("type")
    return QuestionItem(
        id=item_id,
        dimension=f"E{enneagram_type}" if enneagram_type else "",
        text=_localized(raw),
        scored=bool(enneagram_type),
    )


def _mbti_item(item_id: str, raw: dict) -> QuestionItem:
    axis = raw.get("dim")
    pole = raw.get("pole")
    return QuestionItem(
        id=item_id,
        dimension=f"{axis}-{pole}" if axis and pole else "",
        axis=axis,
        pole=pole,
        text=_localized(raw),
        scored=bool(axis and pole),
    )


def _composite_item(item_id: str, raw: dict) -> QuestionItem:
    return QuestionItem(id=item_id, dimension=item_id, text=_localized(raw))


def _localized(raw: Any) -> LocalizedText:
    if not isinstance(raw, dict):
        return LocalizedText()
    return LocalizedText(zh=str(raw.get("zh") or ""), en=str(raw.get("en") or ""))


def validate_question_bank(path: PathLike) -> tuple[bool, list[str]]:
    """Check that a bank loads and every scored item is well formed."""
    try:
        bank = load_question_bank(path)
    except QuestionBankLoadError as e:
        return False, [str(e)]

    issues = []
    if not bank.modules:
        issues.append("Bank has no modules")
    seen_ids: set[str] = set()
    for module in bank.modules:
        if not module.items:
            issues.append(f"Module '{module.key}' has no items")
        for item in module.items:
            if item.id in seen_ids:
                issues.append(f"Duplicate item id '{item.id}'")
            seen_ids.add(item.id)
            if item.scale_kind == ScaleKind.BINARY_EXPECTED and item.expected_answer is None:
                issues.append(f"Item '{item.id}' expects an answer but has none; endorsement scoring applies")
    if not bank.scale.scores:
        issues.append("Scale has no weights")
    return not issues, issues


# =============================================================================
# Career catalog
# =============================================================================


def load_career_catalog(path: PathLike) -> CareerCatalog:
    """Load a career catalog.

    Accepts either ``{"version": ..., "islands": {...}}`` or a bare mapping of
    island code to record list.

    Raises:
        CatalogLoadError: If the file is unreadable or malformed.
    """
    path = Path(path)
    try:
        data = read_data_file(path)
    except READ_ERRORS as e:
        raise CatalogLoadError(f"Cannot read catalog {path}: {e}") from e

    if not isinstance(data, dict):
        raise CatalogLoadError("Catalog must be a JSON object")
    if not isinstance(data.get("islands"), dict):
        data = {"islands": data}

    try:
        catalog = CareerCatalog.model_validate(data)
    except ValidationError as e:
        raise CatalogLoadError(f"Invalid catalog {path}: {e}") from e

    logger.info(
        "Loaded catalog %s: %d islands, %d records",
        path, len(catalog.islands), catalog.total_records,
    )
    return catalog


def validate_career_catalog(path: PathLike) -> tuple[bool, list[str]]:
    """Check that a catalog loads and has records."""
    try:
        catalog = load_career_catalog(path)
    except CatalogLoadError as e:
        return False, [str(e)]

    issues = []
    if not catalog.islands:
        issues.append("Catalog has no islands")
    for code, records in catalog.islands.items():
        if not records:
            issues.append(f"Island '{code}' has no records")
    return not issues, issues


# =============================================================================
# Answers and prior scores
# =============================================================================


def load_answer_vector(path: PathLike) -> list:
    """Load an answer vector; anything other than a JSON array becomes empty."""
    try:
        data = read_data_file(path)
    except READ_ERRORS as e:
        logger.warning("Cannot read answers %s (%s); treating as unanswered", path, e)
        return []
    if not isinstance(data, list):
        logger.warning("Answers in %s are not a list; treating as unanswered", path)
        return []
    return data


def coerce_score_map(data: Any) -> dict[str, float]:
    """Keep only finite numeric entries of a dimension score mapping."""
    if not isinstance(data, dict):
        return {}
    out: dict[str, float] = {}
    for key, value in data.items():
        if isinstance(value, bool):
            continue
        try:
            number = float(value)
        except (TypeError, ValueError):
            continue
        if math.isfinite(number):
            out[str(key)] = number
    return out


def load_traditional_scores(path: PathLike) -> tuple[dict[str, float], dict[str, float]]:
    """Load previously computed free-tier scores.

    The file holds ``{"intelligences": {...}, "interests": {...}}``; either
    part may be missing.
    """
    try:
        data = read_data_file(path)
    except READ_ERRORS as e:
        logger.warning("Cannot read traditional scores %s (%s); ignoring", path, e)
        return {}, {}
    if not isinstance(data, dict):
        return {}, {}
    return coerce_score_map(data.get("intelligences")), coerce_score_map(data.get("interests"))
