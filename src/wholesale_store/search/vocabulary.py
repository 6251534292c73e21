"""
Static search vocabulary.

Hand-authored, read-only tables. Group and keyword order matters: related
terms and suggestions take members in the order listed here.
"""
from types import MappingProxyType

# Word → related words
SYNONYMS = MappingProxyType({
    # Technology
    "laptop": ("notebook", "computer", "pc", "macbook", "chromebook"),
    "headphones": ("earphones", "earbuds", "headset", "audio", "music"),
    "speaker": ("audio", "sound", "bluetooth", "wireless", "music"),
    "watch": ("smartwatch", "wearable", "fitness", "tracker", "time"),
    "cable": ("cord", "wire", "connector", "usb", "charging"),
    "webcam": ("camera", "video", "streaming", "conference", "meeting"),

    # Features
    "wireless": ("bluetooth", "cordless", "portable", "mobile"),
    "smart": ("intelligent", "connected", "digital", "electronic"),
    "portable": ("mobile", "compact", "travel", "lightweight"),
    "gaming": ("game", "gamer", "esports", "entertainment"),
    "professional": ("business", "work", "office", "enterprise"),

    # Quality
    "premium": ("high-end", "quality", "professional", "advanced"),
    "budget": ("affordable", "cheap", "economical", "basic"),
    "durable": ("strong", "robust", "reliable", "quality"),

    # Use case
    "work": ("office", "business", "professional", "productivity"),
    "home": ("personal", "family", "domestic", "household"),
    "travel": ("portable", "mobile", "compact", "lightweight"),
})

# Category → keywords
CATEGORIES = MappingProxyType({
    "Audio": ("speaker", "headphones", "earphones", "sound", "music", "audio", "bluetooth"),
    "Computing": ("laptop", "computer", "pc", "stand", "notebook", "macbook"),
    "Wearables": ("watch", "smartwatch", "fitness", "tracker", "wearable"),
    "Accessories": ("cable", "cord", "cover", "case", "connector", "usb"),
    "Video": ("webcam", "camera", "video", "streaming", "conference"),
})
