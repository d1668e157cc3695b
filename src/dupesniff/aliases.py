from dupesniff.core.models import TieBreak

TIE_BREAK_ALIASES = {
    "first": TieBreak.FIRST,
    "shortest-path": TieBreak.SHORTEST_PATH,
    "path": TieBreak.SHORTEST_PATH,
}

TIE_BREAK_CHOICES = list(TIE_BREAK_ALIASES.keys())

TIE_BREAK_HELP_TEXT = (
    "Which file to delete when both files of a pair have the same\n"
    "creation time (or it cannot be read). The newer file always goes otherwise.\n"
    "  first          : delete the first file of the pair (default)\n"
    "  shortest-path  : keep the shorter path, delete the longer one\n"
)

# Interactive-mode questions, keyed by the ScanOptions field they set
PROMPTS = {
    "preload_index": "Preload index from {index_path}?",
    "delete_duplicates": "Delete dupes?",
    "write_duplicate_playlist": "Write dupe playlist?",
    "show_suspects": "Show suspects?",
    "write_suspect_playlist": "Write suspect playlist?",
    "show_empty": "Show empty files?",
    "delete_empty": "Delete empty files?",
    "persist_index": "Persist index to {index_path}?",
}

EPILOG_TEXT = """
Files are compared by fingerprints of two 1024-byte samples (start and middle),
never by name, size or date. Pairs whose middles differ are reported as suspects.

Examples:
  Report duplicates under ~/Videos
  %(prog)s ~/Videos

  Reuse and update an index kept in ~/.cache, so several roots can be compared
  %(prog)s ~/Videos ~/.cache --preload-index --persist-index

  Write playlists for manual review in VLC
  %(prog)s ~/Videos --dupe-playlist --suspect-playlist

  Delete the newer file of every duplicate pair, moving it to the trash
  %(prog)s ~/Videos --delete-dupes --trash

  Answer each decision at a prompt
  %(prog)s ~/Videos --interactive
"""
