"""Factory helpers for creating the list-view entities."""
from esper import World

from roster.components.action_button import ActionButton, ButtonGroupLabel, ListViewTag, RosterAction
from roster.constants import BUTTON_HEIGHT, BUTTON_WIDTH
from roster.ui.layout import button_group_positions, compute_list_geometry

BUTTON_GROUPS = (
    (
        "Character Actions",
        (
            ("Create New", RosterAction.CREATE),
            ("Clone Selected", RosterAction.CLONE),
            ("Edit Selected", RosterAction.EDIT),
            ("Delete Selected", RosterAction.DELETE),
        ),
    ),
    (
        "Save/Load",
        (
            ("Save as JSON", RosterAction.SAVE_JSON),
            ("Save as XML", RosterAction.SAVE_XML),
            ("Load from JSON", RosterAction.LOAD_JSON),
            ("Load from XML", RosterAction.LOAD_XML),
        ),
    ),
)


def spawn_list_view(world: World, width: int, height: int) -> None:
    """Create the action buttons and their group captions beside the list."""
    clear_list_view(world)
    geometry = compute_list_geometry(width, height)
    positions = button_group_positions(geometry, [len(buttons) for _, buttons in BUTTON_GROUPS])
    for (caption, buttons), (caption_y, centers) in zip(BUTTON_GROUPS, positions):
        world.create_entity(
            ButtonGroupLabel(text=caption, x=geometry.button_center_x, y=caption_y),
            ListViewTag(),
        )
        for (label, action), center_y in zip(buttons, centers):
            world.create_entity(
                ActionButton(
                    label=label,
                    action=action,
                    x=geometry.button_center_x,
                    y=center_y,
                    width=BUTTON_WIDTH,
                    height=BUTTON_HEIGHT,
                ),
                ListViewTag(),
            )


def clear_list_view(world: World) -> None:
    """Remove every entity that is part of the list-view chrome."""
    for ent, _ in list(world.get_component(ListViewTag)):
        world.delete_entity(ent, immediate=True)
