"""
Central Configuration
All constants and default settings in one place
"""

# === FRAME TIMING ===
# Speeds are expressed in pixels per frame at FRAME_HZ, so a frame driver
# passes delta = elapsed / FRAME_DT (1.0 at the nominal rate).
FRAME_HZ = 60
FRAME_DT = 1.0 / FRAME_HZ

# Guard threshold used only when zero-division hardening is enabled
EPS = 1e-6

# === POPULATION ===
DEFAULT_BOID_COUNT = 100
MIN_BOID_COUNT = 0

# World size used when no viewport dimensions are supplied
DEFAULT_WORLD_WIDTH = 800.0
DEFAULT_WORLD_HEIGHT = 600.0

# === INITIAL STATE ===
# Initial speed is drawn from [MIN_INITIAL_SPEED, max_speed)
MIN_INITIAL_SPEED = 0.5

# === BOID SETTINGS DEFAULTS ===
DEFAULT_VISION_RADIUS = 50.0
DEFAULT_MAX_SPEED = 6.0
DEFAULT_CONTAIN_FORCE = 0.25
DEFAULT_CONTAIN_PADDING = 25.0
DEFAULT_PULL_FORCE = 1.0
DEFAULT_CENTER_FORCE = 0.000025
DEFAULT_ALIGN_FORCE = 0.1
DEFAULT_COHESION_FORCE = 0.02
DEFAULT_SEPARATION_FORCE = 0.04
DEFAULT_SIZE = 0.05  # Sprite scale, presentation only

# Legacy camelCase keys accepted in settings files -> field names
LEGACY_SETTINGS_KEYS = {
    'visionRad': 'vision_radius',
    'maxSpeed': 'max_speed',
    'containForce': 'contain_force',
    'containPadding': 'contain_padding',
    'pullForce': 'pull_force',
    'centerForce': 'center_force',
    'alignForce': 'align_force',
    'cohesionForce': 'cohesion_force',
    'seperationForce': 'separation_force',  # sic, legacy spelling
    'separationForce': 'separation_force',
}

# Settings file name inside the app config dir
SETTINGS_FILENAME = "settings.json"
