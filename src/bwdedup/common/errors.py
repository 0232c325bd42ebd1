# src/bwdedup/common/errors.py

class DedupError(Exception):
    """Base class for every error reported to the user"""
    pass


class ConfigError(DedupError):
    """Config file unreadable or holding invalid values"""
    pass


class ExportReadError(DedupError):
    """Export file missing, unreadable, or not valid JSON"""
    pass


class ExportFormatError(DedupError):
    """Export parsed, but has no top-level 'items' list"""
    pass


class ExportWriteError(DedupError):
    """Writing the deduplicated export failed"""
    pass


class OutputExistsError(DedupError):
    """Output file already exists and --force was not given"""
    pass


class CanonicalizationError(DedupError):
    """A record could not be serialized canonically (internal defect)"""
    pass
