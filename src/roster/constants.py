WINDOW_WIDTH = 900
WINDOW_HEIGHT = 600
WINDOW_TITLE = "Game Character Manager"

# List view geometry. The list column is anchored to the left edge and takes a
# fixed fraction of the window width; buttons fill the remaining column.
LIST_MARGIN = 20
LIST_WIDTH_PCT = 0.55
LIST_HEADER_HEIGHT = 40
LIST_ROW_HEIGHT = 28
BUTTON_WIDTH = 220
BUTTON_HEIGHT = 40
BUTTON_GAP = 10
# Extra space between the "Character Actions" and "Save/Load" button groups.
BUTTON_GROUP_GAP = 46

# Editor dialog geometry (centered in the window).
EDITOR_WIDTH = 520
EDITOR_HEIGHT = 580
EDITOR_PADDING = 20
EDITOR_ROW_HEIGHT = 34
EDITOR_LABEL_WIDTH = 130
EDITOR_ABILITY_ROWS = 5

# Notice dialog geometry.
NOTICE_WIDTH = 460
NOTICE_HEIGHT = 180

# Field ranges enforced by the editor widgets (inclusive).
LEVEL_RANGE = (1, 100)
HEALTH_RANGE = (1, 1000)
MANA_RANGE = (0, 1000)

# Fixed option sets offered by the editor selectors.
WEAPON_OPTIONS = ("Sword", "Bow", "Staff", "Dagger", "Axe", "Hammer")
ARMOR_OPTIONS = ("Light", "Medium", "Heavy", "Magic")

CLONE_NAME_SUFFIX = " (Copy)"

JSON_FILE_NAME = "characters.json"
XML_FILE_NAME = "characters.xml"
