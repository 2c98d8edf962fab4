# -*- coding: utf-8 -*-
"""
Shared constants and tables for the Camera Evolution application.
"""

# ==========================================
#              ERA TABLE
# ==========================================

# Ordered oldest to newest. The position in this list drives previous/next
# navigation; the year is only shown to the user.
# Tone entries are CSS-filter style (name, amount): fractions for
# grayscale/sepia/saturate/contrast/brightness, degrees for hue-rotate,
# pixels (standard deviation) for blur.
ERAS = [
    {
        'id': 'daguerreotype',
        'name': 'Daguerreotype',
        'year': 1839,
        'tone': [('grayscale', 1.0), ('contrast', 1.3), ('brightness', 0.85), ('blur', 0.5)],
        'color_depth': 6,   # 64 levels
        'exposure': 'long', # Long exposure = motion ghosting
    },
    {
        'id': 'wet-plate',
        'name': 'Wet Plate Collodion',
        'year': 1855,
        'tone': [('grayscale', 1.0), ('contrast', 1.4), ('brightness', 0.95), ('blur', 0.4)],
        'color_depth': 7,
        'exposure': 'medium',
    },
    {
        'id': 'early-film',
        'name': 'Early Film',
        'year': 1900,
        'tone': [('grayscale', 1.0), ('contrast', 0.95), ('brightness', 0.88)],
        'color_depth': 8,
        'exposure': 'normal',
    },
    {
        'id': 'sepia',
        'name': 'Sepia Portrait',
        'year': 1930,
        'tone': [('sepia', 1.0), ('contrast', 0.8), ('brightness', 1.08), ('saturate', 0.7), ('blur', 0.6)],
        'color_depth': 8,
        'exposure': 'normal',
    },
    {
        'id': 'noir',
        'name': 'Film Noir',
        'year': 1945,
        'tone': [('grayscale', 1.0), ('contrast', 1.5), ('brightness', 0.8)],
        'color_depth': 8,
        'exposure': 'normal',
    },
    {
        'id': 'kodachrome',
        'name': 'Kodachrome',
        'year': 1960,
        'tone': [('saturate', 1.4), ('contrast', 1.15), ('brightness', 0.95), ('hue-rotate', -2.0)],
        'color_depth': 24,  # Full color
        'exposure': 'normal',
    },
    {
        'id': 'polaroid',
        'name': 'Polaroid',
        'year': 1980,
        'tone': [('contrast', 0.75), ('saturate', 0.85), ('brightness', 1.15), ('blur', 0.6)],
        'color_depth': 16,
        'exposure': 'normal',
    },
    {
        'id': 'early-digital',
        'name': 'Early Digital',
        'year': 2000,
        'tone': [('contrast', 1.25), ('saturate', 1.1), ('brightness', 0.95)],
        'color_depth': 16,
        'exposure': 'fast',
    },
    {
        'id': 'smartphone-hdr',
        'name': 'Smartphone HDR',
        'year': 2010,
        'tone': [('contrast', 1.35), ('saturate', 1.4), ('brightness', 1.08)],
        'color_depth': 24,
        'exposure': 'fast',
    },
    {
        'id': 'modern',
        'name': 'Modern',
        'year': 2018,
        'tone': [],
        'color_depth': 32,  # Full color + alpha
        'exposure': 'fast',
    },
]

TONE_ADJUSTMENTS = [
    'grayscale',
    'sepia',
    'saturate',
    'contrast',
    'brightness',
    'hue-rotate',
    'blur',
]

EXPOSURE_CLASSES = ['fast', 'normal', 'medium', 'long']

# Depths at or above this are rendered in full color.
FULL_COLOR_DEPTH = 24

# Long exposure ghosting: extra self-composites, their opacity and blur.
GHOST_PASSES = 3
GHOST_OPACITY = 0.3
GHOST_BLUR = 2.0

# ==========================================
#              ASPECT FORMATS
# ==========================================

# (numerator, denominator) of width/height, and the fixed output size.
ASPECT_FORMATS = {
    'square': {'aspect': (1, 1), 'size': (1080, 1080)},
    'portrait': {'aspect': (4, 5), 'size': (1080, 1350)},
    'landscape': {'aspect': (191, 100), 'size': (1080, 566)},
}

DEFAULT_FORMAT = 'square'

# ==========================================
#              ENCODER & FILES
# ==========================================

JPEG_QUALITY = 95  # 0.95 on a 0..1 scale

# image_format -> file extension
OUTPUT_EXTENSIONS = {
    'jpeg': 'jpg',
    'tiff': 'tif',
    'heif': 'heic',
}

SUPPORTED_RAW_EXTENSIONS = [
    '.dng', '.cr2', '.cr3', '.nef', '.arw', '.rw2', '.raf', '.orf', '.pef', '.srw'
]

SUPPORTED_IMAGE_EXTENSIONS = [
    '.png', '.jpg', '.jpeg', '.bmp', '.tif', '.tiff', '.webp'
]

GALLERY_INDEX = 'gallery.json'
