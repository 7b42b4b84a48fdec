"""Static catalog of every window rule field.

The table is built once at import time and iterated in order wherever a
record needs one item per field. Option lists that depend on the running
session (virtual desktops, activities, colour schemes) start with their
static entries only and are replaced per item by the front-end.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from window_rules.constants import POLICY_KEY_SUFFIX
from window_rules.models import (
    NULL_ACTIVITY,
    ON_ALL_DESKTOPS,
    OptionData,
    PolicyKind,
    RuleFlag,
    ValueKind,
    WindowType,
)


SECTION_MATCHING: Final[str] = "Window matching"
SECTION_GEOMETRY: Final[str] = "Size & Position"
SECTION_ARRANGEMENT: Final[str] = "Arrangement & Access"
SECTION_APPEARANCE: Final[str] = "Appearance & Fixes"

SECTIONS: Final[tuple[str, ...]] = (
    SECTION_MATCHING,
    SECTION_GEOMETRY,
    SECTION_ARRANGEMENT,
    SECTION_APPEARANCE,
)


WINDOW_TYPE_OPTIONS: Final[tuple[OptionData, ...]] = (
    OptionData(WindowType.NORMAL.value, "Normal Window", "window"),
    OptionData(WindowType.DIALOG.value, "Dialog Window", "window-duplicate"),
    OptionData(WindowType.UTILITY.value, "Utility Window", "dialog-object-properties"),
    OptionData(WindowType.DOCK.value, "Dock (panel)", "list-remove"),
    OptionData(WindowType.TOOLBAR.value, "Toolbar", "tools"),
    OptionData(WindowType.MENU.value, "Torn-Off Menu", "overflow-menu-left"),
    OptionData(WindowType.SPLASH.value, "Splash Screen", "embosstool"),
    OptionData(WindowType.DESKTOP.value, "Desktop", "desktop"),
    OptionData(WindowType.TOP_MENU.value, "Standalone Menubar", "open-menu-symbolic"),
)

PLACEMENT_OPTIONS: Final[tuple[OptionData, ...]] = (
    OptionData("Default", "Default"),
    OptionData("NoPlacement", "No Placement"),
    OptionData("Smart", "Minimal Overlapping"),
    OptionData("Maximizing", "Maximized"),
    OptionData("Cascade", "Cascaded"),
    OptionData("Centered", "Centered"),
    OptionData("Random", "Random"),
    OptionData("ZeroCornered", "In Top-Left Corner"),
    OptionData("UnderMouse", "Under Mouse"),
    OptionData("OnMainWindow", "On Main Window"),
)

FOCUS_OPTIONS: Final[tuple[OptionData, ...]] = (
    OptionData(0, "None"),
    OptionData(1, "Low"),
    OptionData(2, "Normal"),
    OptionData(3, "High"),
    OptionData(4, "Extreme"),
)

DESKTOP_OPTIONS: Final[tuple[OptionData, ...]] = (
    OptionData(ON_ALL_DESKTOPS, "All Desktops", "window-pin"),
)

ACTIVITY_OPTIONS: Final[tuple[OptionData, ...]] = (
    OptionData(NULL_ACTIVITY, "All Activities", "activities"),
)


@dataclass(frozen=True)
class RuleField:
    key: str
    value_kind: ValueKind
    policy_kind: PolicyKind
    name: str
    section: str
    icon: str = "window"
    flags: RuleFlag = RuleFlag.NONE
    options: tuple[OptionData, ...] = ()
    tooltip: str = ""

    @property
    def policy_key(self) -> str | None:
        if self.policy_kind == PolicyKind.NONE:
            return None
        return f"{self.key}{POLICY_KEY_SUFFIX}"

    def has_flag(self, flag: RuleFlag) -> bool:
        return bool(self.flags & flag)


_S = ValueKind.STRING
_B = ValueKind.BOOLEAN
_I = ValueKind.INTEGER
_P = ValueKind.PERCENTAGE
_C = ValueKind.COORDINATE
_O = ValueKind.OPTION
_F = ValueKind.FLAGS_OPTION
_K = ValueKind.SHORTCUT

_NO = PolicyKind.NONE
_MATCH = PolicyKind.STRING_MATCH
_SET = PolicyKind.SET_RULE
_FORCE = PolicyKind.FORCE_RULE

_ALWAYS = RuleFlag.ALWAYS_ENABLED
_WARN = RuleFlag.AFFECTS_WARNING
_DESC = RuleFlag.AFFECTS_DESCRIPTION


RULE_FIELDS: Final[tuple[RuleField, ...]] = (
    # Window matching
    RuleField("description", _S, _NO, "Description", SECTION_MATCHING, "entry-edit",
              _ALWAYS | _DESC),
    RuleField("wmclass", _S, _MATCH, "Window class (application)", SECTION_MATCHING, "window",
              _ALWAYS | _WARN | _DESC),
    RuleField("wmclasscomplete", _B, _NO, "Match whole window class", SECTION_MATCHING, "window",
              _ALWAYS),
    RuleField("types", _F, _NO, "Window types", SECTION_MATCHING, "window-duplicate",
              _ALWAYS | _WARN, WINDOW_TYPE_OPTIONS),
    RuleField("windowrole", _S, _NO, "Window role", SECTION_MATCHING, "dialog-object-properties"),
    RuleField("title", _S, _MATCH, "Window title", SECTION_MATCHING, "edit-comment", _DESC),
    RuleField("clientmachine", _S, _MATCH, "Machine (hostname)", SECTION_MATCHING, "computer"),
    # Size & Position
    RuleField("position", _C, _SET, "Position", SECTION_GEOMETRY, "transform-move"),
    RuleField("size", _C, _SET, "Size", SECTION_GEOMETRY, "image-resize-symbolic"),
    RuleField("maximizehoriz", _B, _SET, "Maximized horizontally", SECTION_GEOMETRY, "resizecol"),
    RuleField("maximizevert", _B, _SET, "Maximized vertically", SECTION_GEOMETRY, "resizerow"),
    RuleField("desktop", _O, _SET, "Virtual Desktop", SECTION_GEOMETRY, "virtual-desktops",
              options=DESKTOP_OPTIONS),
    RuleField("activity", _O, _SET, "Activity", SECTION_GEOMETRY, "activities",
              options=ACTIVITY_OPTIONS),
    RuleField("screen", _I, _SET, "Screen", SECTION_GEOMETRY, "osd-shutd-screen"),
    RuleField("fullscreen", _B, _SET, "Fullscreen", SECTION_GEOMETRY, "view-fullscreen"),
    RuleField("minimize", _B, _SET, "Minimized", SECTION_GEOMETRY, "window-minimize"),
    RuleField("shade", _B, _SET, "Shaded", SECTION_GEOMETRY, "window-shade"),
    RuleField("placement", _O, _FORCE, "Initial placement", SECTION_GEOMETRY, "region",
              options=PLACEMENT_OPTIONS),
    RuleField("ignoregeometry", _B, _SET, "Ignore requested geometry", SECTION_GEOMETRY,
              "view-time-schedule-baselined-remove",
              tooltip="Windows can ask to appear in a certain position.\n"
                      "By default this overrides the placement strategy\n"
                      "what might be nasty if the client abuses the feature\n"
                      "to unconditionally popup in the middle of your screen."),
    RuleField("minsize", _C, _FORCE, "Minimum Size", SECTION_GEOMETRY, "image-resize-symbolic"),
    RuleField("maxsize", _C, _FORCE, "Maximum Size", SECTION_GEOMETRY, "image-resize-symbolic"),
    RuleField("strictgeometry", _B, _FORCE, "Obey geometry restrictions", SECTION_GEOMETRY,
              "transform-crop-and-resize",
              tooltip="Eg. terminals or video players can ask to keep a certain aspect ratio\n"
                      "or only grow by values larger than one.\n"
                      "The restriction prevents arbitrary dimensions\n"
                      "like your complete screen area."),
    # Arrangement & Access
    RuleField("above", _B, _SET, "Keep above", SECTION_ARRANGEMENT, "window-keep-above"),
    RuleField("below", _B, _SET, "Keep below", SECTION_ARRANGEMENT, "window-keep-below"),
    RuleField("skiptaskbar", _B, _SET, "Skip taskbar", SECTION_ARRANGEMENT, "kt-show-statusbar",
              tooltip="Window shall (not) appear in the taskbar."),
    RuleField("skippager", _B, _SET, "Skip pager", SECTION_ARRANGEMENT, "org.kde.plasma.pager",
              tooltip="Window shall (not) appear in the manager for virtual desktops"),
    RuleField("skipswitcher", _B, _SET, "Skip switcher", SECTION_ARRANGEMENT,
              "preferences-system-windows-effect-flipswitch",
              tooltip="Window shall (not) appear in the Alt+Tab list"),
    RuleField("shortcut", _K, _SET, "Shortcut", SECTION_ARRANGEMENT, "configure-shortcuts"),
    # Appearance & Fixes
    RuleField("noborder", _B, _SET, "No titlebar and frame", SECTION_APPEARANCE, "dialog-cancel"),
    RuleField("decocolor", _O, _FORCE, "Titlebar color scheme", SECTION_APPEARANCE,
              "preferences-desktop-theme"),
    RuleField("opacityactive", _P, _FORCE, "Active opacity", SECTION_APPEARANCE, "edit-opacity"),
    RuleField("opacityinactive", _P, _FORCE, "Inactive opacity", SECTION_APPEARANCE, "edit-opacity"),
    RuleField("fsplevel", _O, _FORCE, "Focus stealing prevention", SECTION_APPEARANCE,
              "preferences-system-windows-effect-glide", options=FOCUS_OPTIONS,
              tooltip="\"None\" will unconditionally allow this window to get the focus while\n"
                      "\"Extreme\" will completely prevent it from taking the focus."),
    RuleField("fpplevel", _O, _FORCE, "Focus protection", SECTION_APPEARANCE,
              "preferences-system-windows-effect-minimize", options=FOCUS_OPTIONS,
              tooltip="This controls the focus protection of the currently active window.\n"
                      "None will always give the focus away,\n"
                      "Extreme will keep it."),
    RuleField("acceptfocus", _B, _FORCE, "Accept focus", SECTION_APPEARANCE,
              "preferences-desktop-cursors",
              tooltip="Windows may prevent to get the focus (activate) when being clicked."),
    RuleField("disableglobalshortcuts", _B, _FORCE, "Ignore global shortcuts", SECTION_APPEARANCE,
              "input-keyboard-virtual-off",
              tooltip="When used, a window will receive all keyboard inputs while it is active,\n"
                      "including Alt+Tab etc."),
    RuleField("closeable", _B, _FORCE, "Closeable", SECTION_APPEARANCE, "dialog-close"),
    RuleField("type", _O, _FORCE, "Set window type", SECTION_APPEARANCE, "window-duplicate",
              options=WINDOW_TYPE_OPTIONS),
    RuleField("desktopfile", _S, _SET, "Desktop file name", SECTION_APPEARANCE,
              "application-x-desktop"),
    RuleField("blockcompositing", _B, _FORCE, "Block compositing", SECTION_APPEARANCE,
              "composite-track-on"),
)


RULE_CATALOG: Final[dict[str, RuleField]] = {item.key: item for item in RULE_FIELDS}

if len(RULE_CATALOG) != len(RULE_FIELDS):
    raise RuntimeError("Duplicate key in rule field catalog")


def rule_field(key: str) -> RuleField:
    return RULE_CATALOG[key]


def rule_keys() -> list[str]:
    return [item.key for item in RULE_FIELDS]


def fields_in_section(section: str) -> list[RuleField]:
    return [item for item in RULE_FIELDS if item.section == section]
