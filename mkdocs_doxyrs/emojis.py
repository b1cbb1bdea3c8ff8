"""Emoji names accepted by ``@emoji``, keyed by their GitHub short name."""

EMOJIS = {
    "+1": "\U0001f44d",
    "-1": "\U0001f44e",
    "100": "\U0001f4af",
    "angry": "\U0001f620",
    "apple": "\U0001f34e",
    "bangbang": "‼️",
    "bell": "\U0001f514",
    "blush": "\U0001f60a",
    "bomb": "\U0001f4a3",
    "book": "\U0001f4d6",
    "books": "\U0001f4da",
    "boom": "\U0001f4a5",
    "broken_heart": "\U0001f494",
    "bug": "\U0001f41b",
    "bulb": "\U0001f4a1",
    "calendar": "\U0001f4c6",
    "check": "✔️",
    "clap": "\U0001f44f",
    "clipboard": "\U0001f4cb",
    "cloud": "☁️",
    "confused": "\U0001f615",
    "construction": "\U0001f6a7",
    "cool": "\U0001f192",
    "cry": "\U0001f622",
    "dog": "\U0001f436",
    "exclamation": "❗",
    "eyes": "\U0001f440",
    "fire": "\U0001f525",
    "gear": "⚙️",
    "ghost": "\U0001f47b",
    "grin": "\U0001f601",
    "grinning": "\U0001f600",
    "hammer": "\U0001f528",
    "heart": "❤️",
    "heavy_check_mark": "✔️",
    "hourglass": "⌛",
    "information_source": "ℹ️",
    "joy": "\U0001f602",
    "key": "\U0001f511",
    "laughing": "\U0001f606",
    "link": "\U0001f517",
    "lock": "\U0001f512",
    "mag": "\U0001f50d",
    "memo": "\U0001f4dd",
    "no_entry": "⛔",
    "ok_hand": "\U0001f44c",
    "package": "\U0001f4e6",
    "pencil2": "✏️",
    "point_right": "\U0001f449",
    "pray": "\U0001f64f",
    "pushpin": "\U0001f4cc",
    "question": "❓",
    "recycle": "♻️",
    "relieved": "\U0001f60c",
    "rocket": "\U0001f680",
    "scream": "\U0001f631",
    "shield": "\U0001f6e1️",
    "skull": "\U0001f480",
    "smile": "\U0001f604",
    "smiley": "\U0001f603",
    "sparkles": "✨",
    "star": "⭐",
    "stop_sign": "\U0001f6d1",
    "sunglasses": "\U0001f60e",
    "tada": "\U0001f389",
    "thinking": "\U0001f914",
    "thumbsdown": "\U0001f44e",
    "thumbsup": "\U0001f44d",
    "turtle": "\U0001f422",
    "warning": "⚠️",
    "wave": "\U0001f44b",
    "white_check_mark": "✅",
    "wink": "\U0001f609",
    "wrench": "\U0001f527",
    "x": "❌",
    "zap": "⚡",
}

UNKNOWN_EMOJI = "Unknown emoji"
