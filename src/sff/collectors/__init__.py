"""File discovery for sff."""

from sff.collectors.folder_collector import FolderCollector, collect_files

__all__ = ["FolderCollector", "collect_files"]
