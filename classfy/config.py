"""
Configuration constants for classfy.
"""

# --- File Type Definitions ---
IMAGE_EXTS = {'jpg', 'jpeg', 'png', 'gif', 'bmp', 'tiff', 'svg', 'webp', 'heic', 'raw', 'cr2', 'nef'}
DOCUMENT_EXTS = {
    'pdf', 'doc', 'docx', 'xls', 'xlsx', 'ppt', 'pptx', 'txt', 'rtf',
    'odt', 'ods', 'odp', 'csv', 'md', 'pages', 'numbers', 'key',
}
MUSIC_EXTS = {'mp3', 'wav', 'flac', 'aac', 'ogg', 'm4a', 'wma', 'aiff', 'alac'}
VIDEO_EXTS = {'mp4', 'avi', 'mkv', 'mov', 'wmv', 'flv', 'webm', 'm4v', '3gp', 'mpeg', 'mpg'}
ARCHIVE_EXTS = {'zip', 'rar', '7z', 'tar', 'gz', 'bz2', 'xz', 'iso', 'dmg'}
# Code files are recognised but deliberately land in "others"
CODE_EXTS = {
    'py', 'js', 'html', 'css', 'java', 'c', 'cpp', 'h', 'sh', 'php',
    'rb', 'go', 'swift', 'ts', 'json', 'xml', 'yml', 'yaml',
}

# Extension to Category Mapping (category values, see models.Category)
EXT_TO_CATEGORY = {}
for ext in IMAGE_EXTS: EXT_TO_CATEGORY[ext] = 'images'
for ext in DOCUMENT_EXTS: EXT_TO_CATEGORY[ext] = 'documents'
for ext in MUSIC_EXTS: EXT_TO_CATEGORY[ext] = 'music'
for ext in VIDEO_EXTS: EXT_TO_CATEGORY[ext] = 'videos'
for ext in ARCHIVE_EXTS: EXT_TO_CATEGORY[ext] = 'archives'
for ext in CODE_EXTS: EXT_TO_CATEGORY[ext] = 'others'

# Folder created under the destination root for each category
CATEGORY_FOLDERS = {
    'images': 'images',
    'documents': 'documents',
    'music': 'musics',
    'videos': 'videos',
    'archives': 'archives',
    'others': 'others',
}

# --- Hashing ---
HASH_ALGORITHM = 'sha1'
HASH_CHUNK_SIZE = 64 * 1024  # 64 KB chunks for reading

# --- Naming ---
TIMESTAMP_FORMAT = "%Y%m%d-%H%M%S"
HASH_PREFIX_LENGTH = 4

# Upper bound for "_<counter>" suffixes tried in one category folder
MAX_COLLISION_ATTEMPTS = 9999
