"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/playlist.py
Writes classified pairs as an XSPF playlist (with VLC track ids) so the
files can be reviewed in a media player before anything is deleted.
"""
import logging
from pathlib import Path
from typing import List
import xml.etree.ElementTree as ET

from dupesniff.core.models import ClassifiedPair

logger = logging.getLogger(__name__)

XSPF_NS = "http://xspf.org/ns/0/"
VLC_NS = "http://www.videolan.org/vlc/playlist/ns/0/"
VLC_APPLICATION = "http://www.videolan.org/vlc/playlist/0"

ET.register_namespace("", XSPF_NS)
ET.register_namespace("vlc", VLC_NS)


def _xspf(tag: str) -> str:
    return f"{{{XSPF_NS}}}{tag}"


class PlaylistExporter:

    @staticmethod
    def build(pairs: List[ClassifiedPair], title: str = "Playlist") -> ET.ElementTree:
        """
        One track per file of every pair, in pair order. Track ids come from
        a single counter that runs across the whole list.
        """
        playlist = ET.Element(_xspf("playlist"), version="1")
        ET.SubElement(playlist, _xspf("title")).text = title
        track_list = ET.SubElement(playlist, _xspf("trackList"))

        track_id = 0
        for pair in pairs:
            for record in pair.files():
                track = ET.SubElement(track_list, _xspf("track"))
                ET.SubElement(track, _xspf("location")).text = Path(record.path).absolute().as_uri()
                extension = ET.SubElement(track, _xspf("extension"), application=VLC_APPLICATION)
                ET.SubElement(extension, f"{{{VLC_NS}}}id").text = str(track_id)
                track_id += 1

        tree = ET.ElementTree(playlist)
        ET.indent(tree, space="\t")
        return tree

    @staticmethod
    def write(pairs: List[ClassifiedPair], output_path: str) -> int:
        """
        Writes the playlist, overwriting any existing file.
        Returns the number of tracks. Raises RuntimeError if the file cannot be written.
        """
        tree = PlaylistExporter.build(pairs)
        track_count = sum(len(pair.files()) for pair in pairs)
        try:
            tree.write(output_path, encoding="UTF-8", xml_declaration=True)
        except OSError as e:
            raise RuntimeError(f"Failed to write playlist {output_path}: {e}") from e

        logger.info(f"Wrote {track_count} tracks to {output_path}")
        return track_count
