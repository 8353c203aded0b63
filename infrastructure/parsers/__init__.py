from .snapshot_parser import LatestRatesDocument, SnapshotParser

__all__ = ['LatestRatesDocument', 'SnapshotParser']
