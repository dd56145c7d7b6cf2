"""
File Classification Module

Maps file names to a semantic type tag (a language for text-like files,
a media class for binary content).

Author: YSNRFD
Version: 1.0.0
"""

FOLDER_CLASS = 'folder'
DEFAULT_CLASS = 'text'

LANGUAGE_BY_EXTENSION: dict[str, str] = {
    # Code / web / programming
    'js': 'javascript', 'mjs': 'javascript',
    'ts': 'typescript',
    'tsx': 'tsx',
    'jsx': 'jsx',
    'html': 'html', 'htm': 'html',
    'css': 'css',
    'scss': 'scss',
    'less': 'less',
    'json': 'json',
    'py': 'python',
    'java': 'java', 'class': 'java',
    'c': 'c', 'h': 'c',
    'cpp': 'cpp',
    'cs': 'csharp',
    'go': 'go',
    'rs': 'rust',
    'php': 'php',
    'sql': 'sql',
    'xml': 'xml', 'svg': 'xml',
    'yaml': 'yaml', 'yml': 'yaml',
    'md': 'text', 'txt': 'text', 'gitignore': 'text', 'env': 'text',
    'csv': 'csv',

    # Text-based config
    'ini': 'ini', 'cfg': 'ini', 'conf': 'ini',

    # System / restricted
    'dll': 'system', 'sys': 'system', 'dat': 'system', 'tmp': 'system',

    # Documents
    'doc': 'document', 'docx': 'document', 'rtf': 'document', 'odt': 'document',
    'pdf': 'pdf',

    # Spreadsheets
    'xls': 'spreadsheet', 'xlsx': 'spreadsheet', 'ods': 'spreadsheet',

    # Images
    'png': 'image', 'jpg': 'image', 'jpeg': 'image', 'gif': 'image',
    'webp': 'image', 'bmp': 'image', 'ico': 'image', 'tiff': 'image', 'tif': 'image',

    # Audio
    'mp3': 'audio', 'wav': 'audio', 'ogg': 'audio', 'flac': 'audio', 'aac': 'audio',

    # Video
    'mp4': 'video', 'webm': 'video', 'mkv': 'video', 'mov': 'video',
    'avi': 'video', 'wmv': 'video',

    # Archives
    'zip': 'archive', 'rar': 'archive', '7z': 'archive', 'tar': 'archive',
    'gz': 'archive', 'tgz': 'archive',

    # Executables
    'exe': 'executable', 'msi': 'executable', 'bin': 'executable',
    'app': 'executable', 'deb': 'executable', 'rpm': 'executable',
}

BINARY_CLASSES = frozenset({
    'image',
    'audio',
    'video',
    'pdf',
    'binary',
    'system',
    'document',
    'spreadsheet',
    'archive',
    'executable',
})


def classify(name: str) -> str:
    """
    Classify a file by the text after its last dot.

    A name without a dot is looked up whole, so 'Makefile' falls through
    to the text default while '.gitignore' maps to 'text' explicitly.
    Unknown extensions are treated as text so they can still be edited.
    """
    ext = name.rsplit('.', 1)[-1].lower()
    return LANGUAGE_BY_EXTENSION.get(ext, DEFAULT_CLASS)


def is_binary(classification: str) -> bool:
    """True for media and binary classes that are never decoded as text."""
    return classification in BINARY_CLASSES
