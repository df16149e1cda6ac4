import json
import logging
import os
import xml.etree.ElementTree as ET
from typing import Any, Dict, Mapping, Union

from .automaton import Automaton
from .errors import MalformedInputError
from .export import format_quintuple
from .validation import validate

logger = logging.getLogger(__name__)

SCHEMA_CANONICAL = "canonical"
SCHEMA_LEGACY = "legacy"
SCHEMAS = (SCHEMA_CANONICAL, SCHEMA_LEGACY)

# canonical key -> legacy key
LEGACY_TRANSITION_KEYS = {"from": "source", "symbol": "input", "to": "target"}


def is_legacy_schema(raw: Mapping[str, Any]) -> bool:
    if "acceptStates" in raw and "finalStates" not in raw:
        return True
    transitions = raw.get("transitions")
    if isinstance(transitions, list):
        return any(
            isinstance(t, Mapping) and any(k in t for k in LEGACY_TRANSITION_KEYS.values())
            for t in transitions
        )
    return False


def normalize_schema(raw: Mapping[str, Any]) -> Dict[str, Any]:
    """Return ``raw`` in the canonical schema, converting the legacy one."""
    data = dict(raw)
    if not is_legacy_schema(raw):
        return data

    if "finalStates" not in data and "acceptStates" in data:
        data["finalStates"] = data.pop("acceptStates")
    transitions = data.get("transitions")
    if isinstance(transitions, list):
        data["transitions"] = [
            {
                canon: t.get(legacy, t.get(canon))
                for canon, legacy in LEGACY_TRANSITION_KEYS.items()
            }
            if isinstance(t, Mapping)
            else t
            for t in transitions
        ]
    return data


def load_automaton(raw: Mapping[str, Any], name: str = "automaton") -> Automaton:
    if not isinstance(raw, Mapping):
        raise MalformedInputError("automaton record must be a JSON object")
    a = validate(normalize_schema(raw), name=name)
    logger.debug(
        "Loaded %s: %d states, %d symbols, %d transitions",
        a.name, len(a.states), len(a.alphabet), len(a.transitions),
    )
    return a


def load_and_validate(data: Union[bytes, str], name: str = "automaton") -> Automaton:
    if isinstance(data, bytes):
        try:
            data = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedInputError(f"input is not valid UTF-8: {e}") from e
    try:
        raw = json.loads(data)
    except json.JSONDecodeError as e:
        raise MalformedInputError(f"invalid JSON: {e}") from e
    return load_automaton(raw, name=name)


def parse_json_automaton(path: str) -> Automaton:
    with open(path, "rb") as f:
        data = f.read()
    name = os.path.splitext(os.path.basename(path))[0]
    a = load_and_validate(data, name=name)
    logger.info("Read %s from %s", a.name, path)
    return a


def parse_xml_automaton(path: str) -> Automaton:
    try:
        root = ET.parse(path).getroot()
    except ET.ParseError as e:
        raise MalformedInputError(f"invalid XML: {e}") from e

    def texts(xpath):
        return [n.text.strip() for n in root.findall(xpath) if n.text]

    start = root.findtext("start")
    raw = {
        "name": root.attrib.get("name") or os.path.splitext(os.path.basename(path))[0],
        "states": texts("states/state"),
        "alphabet": texts("alphabet/symbol"),
        "initialState": start.strip() if start else None,
        "finalStates": texts("accept/state"),
        "transitions": [
            {k: (t.attrib.get(k) or "").strip() for k in ("from", "symbol", "to")}
            for t in root.findall("transitions/t")
        ],
    }
    a = validate(raw)
    logger.info("Read %s from %s", a.name, path)
    return a


def detect_format_from_ext(path: str) -> str:
    ext = os.path.splitext(path)[1].lower()
    if ext in (".json", ".jsn"):
        return "json"
    if ext in (".xml",):
        return "xml"
    if ext in (".txt",):
        return "txt"
    return "json"


def read_automaton(path: str, fmt: str = None) -> Automaton:
    fmt = fmt or detect_format_from_ext(path)
    if fmt == "json":
        return parse_json_automaton(path)
    elif fmt == "xml":
        return parse_xml_automaton(path)
    else:
        raise MalformedInputError(f"Unsupported input format: {fmt}")


def automaton_to_json_dict(a: Automaton, schema: str = SCHEMA_CANONICAL) -> dict:
    if schema == SCHEMA_CANONICAL:
        transitions = [{"from": t.src, "symbol": t.symbol, "to": t.dst} for t in a.transitions]
        finals_key = "finalStates"
    elif schema == SCHEMA_LEGACY:
        transitions = [
            {"source": t.src, "input": t.symbol, "target": t.dst} for t in a.transitions
        ]
        finals_key = "acceptStates"
    else:
        raise ValueError(f"Unknown schema: {schema}")

    return {
        "name": a.name,
        "states": list(a.states),
        "alphabet": list(a.alphabet),
        "transitions": transitions,
        "initialState": a.initial_state,
        finals_key: list(a.final_states),
    }


def automaton_to_xml_element(a: Automaton) -> ET.Element:
    root = ET.Element("automaton", attrib={"name": a.name})
    states_el = ET.SubElement(root, "states")
    for s in a.states:
        state_el = ET.SubElement(states_el, "state")
        state_el.text = s
        if s in a.state_composition:
            state_el.set(
                "composition",
                ",".join("" if c is None else c for c in a.state_composition[s]),
            )
    alpha_el = ET.SubElement(root, "alphabet")
    for sym in a.alphabet:
        ET.SubElement(alpha_el, "symbol").text = sym
    ET.SubElement(root, "start").text = a.initial_state
    accept_el = ET.SubElement(root, "accept")
    for s in a.final_states:
        ET.SubElement(accept_el, "state").text = s
    trans_el = ET.SubElement(root, "transitions")
    for t in a.transitions:
        ET.SubElement(trans_el, "t", attrib={"from": t.src, "symbol": t.symbol, "to": t.dst})
    return root


def write_automaton(
    a: Automaton,
    path: str,
    fmt: str = None,
    schema: str = SCHEMA_CANONICAL,
    style: str = "list",
) -> None:
    fmt = fmt or detect_format_from_ext(path)
    dirname = os.path.dirname(path)
    if dirname:
        os.makedirs(dirname, exist_ok=True)

    if fmt == "json":
        with open(path, "w", encoding="utf-8") as f:
            json.dump(automaton_to_json_dict(a, schema), f, ensure_ascii=False, indent=2)
    elif fmt == "xml":
        tree = ET.ElementTree(automaton_to_xml_element(a))
        tree.write(path, encoding="utf-8", xml_declaration=True)
    elif fmt == "txt":
        with open(path, "w", encoding="utf-8") as f:
            f.write(format_quintuple(a, style=style))
    else:
        raise ValueError(f"Unsupported output format: {fmt}")
    logger.info("Wrote %s to %s (%s)", a.name, path, fmt)
