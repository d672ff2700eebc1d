"""Reading and writing the character list as JSON or XML documents.

Every function here reports failure through a :class:`PersistenceResult`
instead of raising, so callers decide how a failed save or load is shown.
"""
from __future__ import annotations

import json
import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Iterable, List, Optional

from roster.components.character_record import CharacterRecord
from roster.constants import JSON_FILE_NAME, XML_FILE_NAME

logger = logging.getLogger(__name__)

XML_ROOT_TAG = "characters"
XML_RECORD_TAG = "character"
XML_ABILITY_TAG = "ability"
_XML_SCALAR_FIELDS = ("name", "level", "health", "mana")
_XML_TRAILING_FIELDS = ("weapon_type", "character_class", "armor_type")
_INTEGER_FIELDS = ("level", "health", "mana")
# Code points outside the XML 1.0 Char production (surrogates included).
_XML_ILLEGAL_CHARS = re.compile("[^\u0009\u000a\u000d\u0020-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


class PersistenceFormat(Enum):
    JSON = "json"
    XML = "xml"

    @property
    def file_name(self) -> str:
        return JSON_FILE_NAME if self is PersistenceFormat.JSON else XML_FILE_NAME

    @property
    def label(self) -> str:
        return self.name


class PersistenceErrorKind(Enum):
    READ_FAILED = auto()
    WRITE_FAILED = auto()
    MALFORMED = auto()


@dataclass(slots=True)
class PersistenceResult:
    """Outcome of a save or load.

    A load whose target does not exist is a success with ``missing`` set and no
    records.
    """

    path: Path
    ok: bool = True
    records: List[CharacterRecord] = field(default_factory=list)
    missing: bool = False
    error: Optional[PersistenceErrorKind] = None
    message: str = ""

    @classmethod
    def failure(cls, path: Path, kind: PersistenceErrorKind, message: str) -> "PersistenceResult":
        return cls(path=path, ok=False, error=kind, message=message)


class MalformedDocument(ValueError):
    """Raised internally when a document parses but does not describe characters."""


# JSON ---------------------------------------------------------------------

def save_json(path: Path | str, records: Iterable[CharacterRecord]) -> PersistenceResult:
    target = Path(path)
    records = list(records)
    payload = [record.to_dict() for record in records]
    try:
        # Encoded up front so an unencodable record never truncates the target.
        data = (json.dumps(payload, indent=2, ensure_ascii=False) + "\n").encode("utf-8")
    except (UnicodeError, ValueError) as exc:
        logger.warning("Could not encode characters for %s: %s", target, exc)
        return PersistenceResult.failure(target, PersistenceErrorKind.WRITE_FAILED, str(exc))
    return _write_document(target, data, records)


def load_json(path: Path | str) -> PersistenceResult:
    target = Path(path)
    try:
        with target.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except FileNotFoundError:
        logger.info("No JSON roster at %s", target)
        return PersistenceResult(path=target, missing=True)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        logger.warning("Malformed JSON in %s: %s", target, exc)
        return PersistenceResult.failure(target, PersistenceErrorKind.MALFORMED, str(exc))
    except OSError as exc:
        logger.warning("Could not read %s: %s", target, exc)
        return PersistenceResult.failure(target, PersistenceErrorKind.READ_FAILED, str(exc))
    try:
        records = decode_json_payload(payload)
    except (MalformedDocument, KeyError, TypeError, ValueError) as exc:
        logger.warning("Unexpected JSON shape in %s: %s", target, exc)
        return PersistenceResult.failure(target, PersistenceErrorKind.MALFORMED, _describe(exc))
    logger.info("Loaded %d characters from %s", len(records), target)
    return PersistenceResult(path=target, records=records)


def decode_json_payload(payload) -> List[CharacterRecord]:
    if not isinstance(payload, list):
        raise MalformedDocument("Expected a list of characters at the top level")
    return [CharacterRecord.from_dict(entry) for entry in payload]


# XML ----------------------------------------------------------------------

def encode_xml_tree(records: Iterable[CharacterRecord]) -> ET.ElementTree:
    root = ET.Element(XML_ROOT_TAG)
    for record in records:
        node = ET.SubElement(root, XML_RECORD_TAG)
        data = record.to_dict()
        for key in _XML_SCALAR_FIELDS:
            ET.SubElement(node, key).text = str(data[key])
        abilities = ET.SubElement(node, "abilities")
        for ability in record.abilities:
            ET.SubElement(abilities, XML_ABILITY_TAG).text = ability
        for key in _XML_TRAILING_FIELDS:
            ET.SubElement(node, key).text = str(data[key])
    tree = ET.ElementTree(root)
    ET.indent(tree, space="  ")
    return tree


def decode_xml_tree(root: ET.Element) -> List[CharacterRecord]:
    if root.tag != XML_ROOT_TAG:
        raise MalformedDocument(f"Expected <{XML_ROOT_TAG}> root element, found <{root.tag}>")
    records: List[CharacterRecord] = []
    for position, node in enumerate(root.findall(XML_RECORD_TAG), start=1):
        payload: dict = {}
        for key in _XML_SCALAR_FIELDS + _XML_TRAILING_FIELDS:
            child = node.find(key)
            if child is None:
                raise MalformedDocument(f"Character {position} is missing <{key}>")
            # ElementTree yields None for an empty element such as <name />.
            payload[key] = child.text or ""
        for key in _INTEGER_FIELDS:
            try:
                payload[key] = int(payload[key].strip())
            except ValueError:
                raise MalformedDocument(
                    f"Character {position} has a non-integer <{key}>: {payload[key]!r}"
                ) from None
        abilities_node = node.find("abilities")
        payload["abilities"] = (
            [child.text or "" for child in abilities_node.findall(XML_ABILITY_TAG)]
            if abilities_node is not None
            else []
        )
        records.append(CharacterRecord.from_dict(payload))
    return records


def find_unstorable_xml_text(records: Iterable[CharacterRecord]) -> Optional[str]:
    """Describe the first text value XML 1.0 cannot hold, or None when all can be saved."""
    for position, record in enumerate(records, start=1):
        fields = [(key, getattr(record, key)) for key in ("name", "weapon_type", "armor_type")]
        fields += [(f"ability {slot}", text) for slot, text in enumerate(record.abilities, start=1)]
        for label, text in fields:
            match = _XML_ILLEGAL_CHARS.search(text)
            if match is not None:
                return f"Character {position} {label} contains U+{ord(match.group()):04X}, which XML cannot store"
    return None


def encode_xml_document(records: Iterable[CharacterRecord]) -> bytes:
    data = ET.tostring(encode_xml_tree(records).getroot(), encoding="utf-8", xml_declaration=True)
    # A literal carriage return would be folded into a newline by the parser.
    return data.replace(b"\r", b"&#13;") + b"\n"


def save_xml(path: Path | str, records: Iterable[CharacterRecord]) -> PersistenceResult:
    target = Path(path)
    records = list(records)
    problem = find_unstorable_xml_text(records)
    if problem is not None:
        logger.warning("Refusing to write %s: %s", target, problem)
        return PersistenceResult.failure(target, PersistenceErrorKind.WRITE_FAILED, problem)
    try:
        data = encode_xml_document(records)
    except (UnicodeError, ValueError) as exc:
        logger.warning("Could not encode characters for %s: %s", target, exc)
        return PersistenceResult.failure(target, PersistenceErrorKind.WRITE_FAILED, str(exc))
    return _write_document(target, data, records)


def load_xml(path: Path | str) -> PersistenceResult:
    target = Path(path)
    try:
        with target.open("rb") as handle:
            root = ET.parse(handle).getroot()
    except FileNotFoundError:
        logger.info("No XML roster at %s", target)
        return PersistenceResult(path=target, missing=True)
    except ET.ParseError as exc:
        logger.warning("Malformed XML in %s: %s", target, exc)
        return PersistenceResult.failure(target, PersistenceErrorKind.MALFORMED, str(exc))
    except OSError as exc:
        logger.warning("Could not read %s: %s", target, exc)
        return PersistenceResult.failure(target, PersistenceErrorKind.READ_FAILED, str(exc))
    try:
        records = decode_xml_tree(root)
    except (MalformedDocument, KeyError, TypeError, ValueError) as exc:
        logger.warning("Unexpected XML shape in %s: %s", target, exc)
        return PersistenceResult.failure(target, PersistenceErrorKind.MALFORMED, _describe(exc))
    logger.info("Loaded %d characters from %s", len(records), target)
    return PersistenceResult(path=target, records=records)


# Dispatch -----------------------------------------------------------------

def save_records(
    fmt: PersistenceFormat,
    path: Path | str,
    records: Iterable[CharacterRecord],
) -> PersistenceResult:
    if fmt is PersistenceFormat.JSON:
        return save_json(path, records)
    return save_xml(path, records)




def load_records(fmt: PersistenceFormat, path: Path | str) -> PersistenceResult:
    if fmt is PersistenceFormat.JSON:
        return load_json(path)
    return load_xml(path)


def _write_document(target: Path, data: bytes, records: List[CharacterRecord]) -> PersistenceResult:
    try:
        with target.open("wb") as handle:
            handle.write(data)
    except OSError as exc:
        logger.warning("Could not write %s: %s", target, exc)
        return PersistenceResult.failure(target, PersistenceErrorKind.WRITE_FAILED, str(exc))
    logger.info("Saved %d characters to %s", len(records), target)
    return PersistenceResult(path=target, records=records)


def _describe(exc: Exception) -> str:
    if isinstance(exc, KeyError):
        return f"Missing field {exc.args[0]!r}"
    return str(exc)


__all__ = [
    "MalformedDocument",
    "PersistenceErrorKind",
    "PersistenceFormat",
    "PersistenceResult",
    "decode_json_payload",
    "decode_xml_tree",
    "encode_xml_document",
    "encode_xml_tree",
    "find_unstorable_xml_text",
    "load_json",
    "load_records",
    "load_xml",
    "save_json",
    "save_records",
    "save_xml",
]
