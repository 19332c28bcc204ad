"""Arrangement path names ("Lead", "Bonus Rhythm 2", ...) for song manifests.

Each playable arrangement in an archive has its own song manifest JSON.
Its ``ArrangementProperties`` flags are turned into a display label, labels
that repeat within one song get a numeric suffix, and the labels are merged
into the master manifest as ``Attributes.PathName``.
"""

import json
import logging
from collections import Counter, defaultdict
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Union

logger = logging.getLogger(__name__)

VOCALS = "Vocals"


@dataclass
class PathName:
    """Derived label for one arrangement entry."""

    key: str
    name: str
    song_key: str


def _load(doc: Union[str, bytes, Dict[str, Any]]) -> Dict[str, Any]:
    if isinstance(doc, (str, bytes)):
        return json.loads(doc)
    return doc


def arrangement_label(properties: Dict[str, Any]) -> str:
    """Build the label from an ``ArrangementProperties`` map.

    If none of pathLead/pathRhythm/pathBass is set the label is just the
    prefix, which may be empty.
    """
    label = ""
    if properties.get("represent") == 0:
        label = "Bonus " if properties.get("bonusArr") == 1 else "Alternate "

    if properties.get("pathLead") == 1:
        label += "Lead"
    elif properties.get("pathRhythm") == 1:
        label += "Rhythm"
    elif properties.get("pathBass") == 1:
        label += "Bass"

    return label


def derive_path_name(doc: Union[str, bytes, Dict[str, Any]]) -> Optional[PathName]:
    """Derive the path name for one song manifest.

    Returns None for vocal arrangements.
    """
    entries = _load(doc)["Entries"]
    key = next(iter(entries), None)
    if key is None:
        raise ValueError("Song manifest has no Entries")
    attributes = entries[key]["Attributes"]

    if attributes.get("ArrangementName") == VOCALS:
        logger.debug("Skipping vocals arrangement %s", key)
        return None

    return PathName(
        key=key,
        name=arrangement_label(attributes["ArrangementProperties"]),
        song_key=attributes["SongKey"],
    )


def deduplicate(path_names: List[PathName]) -> List[PathName]:
    """Number labels that repeat within a song, in encounter order.

    Mutates and returns ``path_names``.
    """
    by_song: Dict[str, List[PathName]] = defaultdict(list)
    for path_name in path_names:
        by_song[path_name.song_key].append(path_name)

    for song in by_song.values():
        counts = Counter(p.name for p in song)
        seen: Counter = Counter()
        for path_name in song:
            if counts[path_name.name] > 1:
                seen[path_name.name] += 1
                path_name.name = f"{path_name.name} {seen[path_name.name]}"

    return path_names


def derive_path_names(docs: Iterable[Union[str, bytes, Dict[str, Any]]]) -> List[PathName]:
    """Derive and deduplicate path names for a set of song manifests."""
    path_names = []
    for doc in docs:
        path_name = derive_path_name(doc)
        if path_name is not None:
            path_names.append(path_name)
    return deduplicate(path_names)


def merge_path_names(manifest: Dict[str, Any], path_names: Iterable[PathName]) -> Dict[str, Any]:
    """Set ``Attributes.PathName`` on matching manifest entries in place."""
    names = {p.key: p.name for p in path_names}
    for key, entry in manifest["Entries"].items():
        if key in names:
            entry.setdefault("Attributes", {})["PathName"] = names[key]
    return manifest


def build_path_name_manifest(reader) -> Dict[str, Any]:
    """Return the archive's master manifest with path names merged in."""
    manifest = json.loads(reader.get_manifest().decode("utf-8"))
    path_names = derive_path_names(data for _, data in reader.song_manifests())
    logger.debug("Derived %d path names", len(path_names))
    return merge_path_names(manifest, path_names)
