"""Japanese translations."""

STRINGS: dict[str, str] = {
    # -- Main Window ---------------------------------------------
    "main.title": "素質シミュレーター",
    "main.language": "言語",

    # -- Slots ---------------------------------------------------
    "slot.main": "主力",
    "slot.support1": "支援1",
    "slot.support2": "支援2",
    "slot.placeholder": "選択してください",

    # -- Potentials ----------------------------------------------
    "section.core": "コア素質",
    "section.sub": "サブ素質",
    "core.planned": "取得する",
    "core.unplanned": "取得しない",
    "level.level6": "レベル6",
    "level.level2-5": "レベル2～5",
    "level.level1": "レベル1止め",
    "level.none": "取得しない",

    # -- Toolbar -------------------------------------------------
    "check.hide_unplanned": "取得しない素質を非表示",
    "btn.reset_count": "カウントリセット",
    "btn.reset_all": "初期化",
    "btn.screenshot": "スクリーンショット",

    # -- Presets -------------------------------------------------
    "preset.label": "プリセット{n}",
    "btn.save": "保存",
    "btn.load": "読込",

    # -- Dialogs -------------------------------------------------
    "dlg.confirm_title": "確認",
    "dlg.reset_all_confirm": "初期化しますか？\n全ての設定がリセットされます。",
    "dlg.overwrite_confirm": "プリセット{n}を上書きしますか？",
    "dlg.discard_confirm": "現在表示中の情報は失われますが、よろしいですか？",
    "dlg.screenshot_title": "スクリーンショットを保存",
    "dlg.screenshot_filter": "PNG (*.png)",

    # -- Errors --------------------------------------------------
    "error.core_limit": "コア素質は{n}つしか取得できません",
    "error.catalog_load": "データの読み込みに失敗しました。data/potential.jsonを確認してください。",
    "error.screenshot": "スクリーンショットの生成に失敗しました",
    "error.generic": "エラーが発生しました: {detail}",
}
