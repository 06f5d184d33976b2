"""English translations."""

STRINGS: dict[str, str] = {
    # -- Main Window ---------------------------------------------
    "main.title": "Potential Simulator",
    "main.language": "Language",

    # -- Slots ---------------------------------------------------
    "slot.main": "Main",
    "slot.support1": "Support 1",
    "slot.support2": "Support 2",
    "slot.placeholder": "Please select",

    # -- Potentials ----------------------------------------------
    "section.core": "Core Potentials",
    "section.sub": "Sub Potentials",
    "core.planned": "Take",
    "core.unplanned": "Skip",
    "level.level6": "Level 6",
    "level.level2-5": "Level 2-5",
    "level.level1": "Stop at Level 1",
    "level.none": "Skip",

    # -- Toolbar -------------------------------------------------
    "check.hide_unplanned": "Hide skipped potentials",
    "btn.reset_count": "Reset Counts",
    "btn.reset_all": "Reset All",
    "btn.screenshot": "Screenshot",

    # -- Presets -------------------------------------------------
    "preset.label": "Preset {n}",
    "btn.save": "Save",
    "btn.load": "Load",

    # -- Dialogs -------------------------------------------------
    "dlg.confirm_title": "Confirm",
    "dlg.reset_all_confirm": "Reset everything?\nAll settings will be cleared.",
    "dlg.overwrite_confirm": "Overwrite preset {n}?",
    "dlg.discard_confirm": "The currently shown setup will be lost. Continue?",
    "dlg.screenshot_title": "Save screenshot",
    "dlg.screenshot_filter": "PNG (*.png)",

    # -- Errors --------------------------------------------------
    "error.core_limit": "Only {n} core potentials can be taken.",
    "error.catalog_load": "Could not load character data. Please check data/potential.json.",
    "error.screenshot": "Could not create the screenshot.",
    "error.generic": "An error occurred: {detail}",
}
