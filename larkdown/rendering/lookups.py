"""
Read-only lookup tables used by the block renderer.

Code language ids, callout emoji ids and callout background colours follow the
numbering of the Lark docx API.
"""

from typing import Dict

# Code block language id -> fence info string
CODE_LANGUAGES: Dict[int, str] = {
    1: "plaintext",
    2: "abap",
    3: "ada",
    4: "apache",
    5: "apex",
    6: "assemblylanguage",
    7: "bash",
    8: "csharp",
    9: "cpp",
    10: "c",
    11: "cobol",
    12: "css",
    13: "coffeescript",
    14: "d",
    15: "dart",
    16: "delphi",
    17: "django",
    18: "dockerfile",
    19: "erlang",
    20: "fortran",
    21: "foxpro",
    22: "go",
    23: "groovy",
    24: "html",
    25: "htmlbars",
    26: "http",
    27: "haskell",
    28: "json",
    29: "java",
    30: "javascript",
    31: "julia",
    32: "kotlin",
    33: "latex",
    34: "lisp",
    35: "logo",
    36: "lua",
    37: "matlab",
    38: "makefile",
    39: "markdown",
    40: "nginx",
    41: "objectivec",
    42: "openedgeabl",
    43: "php",
    44: "perl",
    45: "postscript",
    46: "powershell",
    47: "prolog",
    48: "protobuf",
    49: "python",
    50: "r",
    51: "rpg",
    52: "ruby",
    53: "rust",
    54: "sas",
    55: "scss",
    56: "sql",
    57: "scala",
    58: "scheme",
    59: "scratch",
    60: "shell",
    61: "swift",
    62: "thrift",
    63: "typescript",
    64: "vbscript",
    65: "vbnet",
    66: "xml",
    67: "yaml",
    68: "cmake",
    69: "diff",
    70: "gherkin",
    71: "graphql",
    72: "glsl",
    73: "properties",
    74: "solidity",
    75: "toml",
}

DEFAULT_CODE_LANGUAGE = "plaintext"

# Callout emoji id -> emoji
CALLOUT_EMOJIS: Dict[str, str] = {
    "100": "💯",
    "alarm_clock": "⏰",
    "apple": "🍎",
    "bangbang": "‼️",
    "beer": "🍺",
    "bell": "🔔",
    "blush": "😊",
    "books": "📚",
    "bookmark": "🔖",
    "bulb": "💡",
    "calendar": "📆",
    "cat": "🐱",
    "clap": "👏",
    "clipboard": "📋",
    "coffee": "☕",
    "construction": "🚧",
    "dart": "🎯",
    "dog": "🐶",
    "exclamation": "❗",
    "eyes": "👀",
    "fire": "🔥",
    "gift": "🎁",
    "grinning": "😀",
    "heart": "❤️",
    "heavy_check_mark": "✔️",
    "hourglass": "⌛",
    "information_source": "ℹ️",
    "joy": "😂",
    "key": "🔑",
    "link": "🔗",
    "lock": "🔒",
    "mag": "🔍",
    "memo": "📝",
    "muscle": "💪",
    "no_entry": "⛔",
    "ok_hand": "👌",
    "panda_face": "🐼",
    "pencil2": "✏️",
    "pushpin": "📌",
    "pray": "🙏",
    "question": "❓",
    "rabbit": "🐰",
    "rainbow": "🌈",
    "rocket": "🚀",
    "round_pushpin": "📍",
    "sos": "🆘",
    "sparkles": "✨",
    "speech_balloon": "💬",
    "star": "⭐",
    "stop_sign": "🛑",
    "sunglasses": "😎",
    "sunny": "☀️",
    "tada": "🎉",
    "thinking_face": "🤔",
    "thought_balloon": "💭",
    "thumbsup": "👍",
    "trophy": "🏆",
    "triangular_flag_on_post": "🚩",
    "warning": "⚠️",
    "wave": "👋",
    "white_check_mark": "✅",
    "x": "❌",
    "zap": "⚡",
}

# Callout background colour -> GitHub admonition kind
ADMONITION_KINDS: Dict[int, str] = {
    1: "CAUTION",     # light red
    2: "WARNING",     # light orange
    3: "WARNING",     # light yellow
    4: "TIP",         # light green
    5: "NOTE",        # light blue
    6: "IMPORTANT",   # light purple
    7: "NOTE",        # pale gray
    8: "CAUTION",     # dark red
    9: "WARNING",     # dark orange
    10: "WARNING",    # dark yellow
    11: "TIP",        # dark green
    12: "NOTE",       # dark blue
    13: "IMPORTANT",  # dark purple
    14: "NOTE",       # dark gray
    15: "NOTE",       # dark slate gray
}

DEFAULT_ADMONITION_KIND = "NOTE"

# Paragraph alignment -> table alignment-row marker
ALIGN_LEFT = 1
ALIGN_CENTER = 2
ALIGN_RIGHT = 3

ALIGN_MARKERS: Dict[int, str] = {
    ALIGN_LEFT: "-",
    ALIGN_CENTER: ":-:",
    ALIGN_RIGHT: "-:",
}
