#!/usr/bin/env python3
# ==============================================================================
# [FILE] src/gui_group_selector.py
# [PROJECT] ChannelLedger
# [ROLE] Group Selector GUI - searchable check list over the curated groups list
# [VERSION] v1.0
# [UPDATED] 2026-10-18
# ==============================================================================

import logging
import sys

from PyQt6.QtWidgets import (
    QApplication, QWidget, QVBoxLayout, QHBoxLayout,
    QPushButton, QLineEdit, QLabel, QTreeWidget, QTreeWidgetItem
)
from PyQt6.QtCore import Qt

from functions.config import load_config
from functions.groups import GroupState, read_groups_file, write_groups_file
from functions.runner import config_arg

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")


class GroupSelector(QWidget):
    def __init__(self, groups_path):
        super().__init__()
        self.setWindowTitle("ChannelLedger - Group Selector")
        self.resize(700, 700)
        self.groups_path = groups_path
        self.groups = {}

        layout = QVBoxLayout()

        # Search
        search_layout = QHBoxLayout()
        search_layout.addWidget(QLabel("Search:"))
        self.search_box = QLineEdit()
        self.search_box.textChanged.connect(self.filter_groups)
        search_layout.addWidget(self.search_box)
        layout.addLayout(search_layout)

        # Tree
        self.tree = QTreeWidget()
        self.tree.setHeaderLabels(["Group"])
        self.tree.itemChanged.connect(self.toggle)
        layout.addWidget(self.tree)

        # Buttons
        btn_layout = QHBoxLayout()
        save_btn = QPushButton("Save Groups")
        save_btn.clicked.connect(self.save)
        btn_layout.addWidget(save_btn)
        layout.addLayout(btn_layout)

        self.setLayout(layout)
        self.load_groups()

    def load_groups(self):
        if not self.groups_path.exists():
            logging.error(f"{self.groups_path} not found. Run the pipeline first.")
            return
        self.groups = read_groups_file(self.groups_path)
        self.filter_groups()

    def filter_groups(self):
        query = self.search_box.text().lower()
        self.tree.blockSignals(True)
        self.tree.clear()
        for name in sorted(self.groups):
            if query not in name.lower():
                continue
            item = QTreeWidgetItem([name])
            item.setFlags(item.flags() | Qt.ItemFlag.ItemIsUserCheckable)
            active = self.groups[name] is GroupState.ACTIVE
            item.setCheckState(0, Qt.CheckState.Checked if active else Qt.CheckState.Unchecked)
            self.tree.addTopLevelItem(item)
        self.tree.blockSignals(False)

    def toggle(self, item, column):
        checked = item.checkState(0) == Qt.CheckState.Checked
        self.groups[item.text(0)] = GroupState.ACTIVE if checked else GroupState.COMMENTED

    def save(self):
        write_groups_file(self.groups_path, self.groups)
        logging.info(f"Saved groups to {self.groups_path}")


if __name__ == "__main__":
    cfg = load_config(config_arg())
    app = QApplication(sys.argv[:1])
    win = GroupSelector(cfg.paths.groups_list)
    win.show()
    sys.exit(app.exec())
