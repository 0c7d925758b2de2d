# -*- coding: utf-8 -*-
"""
YT Comment Exporter: scroll a YouTube video page, collect comments, save CSV.

- Start opens Chrome on the URL; browse to any video from there
- Extract checks the page is a /watch page and runs the scroll loop
- Results land in output/youtube_comments_<title>.csv and in the table below
"""

import sys, os
from PyQt5 import QtWidgets, QtCore, QtGui
from PyQt5.QtWidgets import QHeaderView, QToolBar, QAction, QStyle
from PyQt5.QtCore import QSize

from ytexport_core import browser, config, utils
from ytexport_core.document import SeleniumDocument
from ytexport_core.extractor import FIELD_NAMES
from ytexport_core.loader import Delay
from ytexport_core.orchestrator import ERROR, ExtractionOrchestrator, Outcome
from ytexport_core.pathing import find_resource

STATUS_COLORS = {"info": "green", "error": "red", "busy": "black"}


def load_icon(qapp: QtWidgets.QApplication, name: str) -> QtGui.QIcon:
    path = find_resource(
        os.path.join("assets", "icons", f"{name}.svg"),
        os.path.join("assets", "icons", f"{name}.png"),
        os.path.join("assets", f"{name}.ico"),
    )
    if path:
        return QtGui.QIcon(path)
    style = qapp.style()
    fallback = {
        "start": QStyle.SP_MediaPlay,
        "stop": QStyle.SP_BrowserStop,
        "extract": QStyle.SP_BrowserReload,
        "export": QStyle.SP_DialogSaveButton,
        "open": QStyle.SP_DirOpenIcon,
        "fit": QStyle.SP_ComputerIcon,
    }.get(name, QStyle.SP_FileIcon)
    return style.standardIcon(fallback)


class ExporterThread(QtCore.QThread):
    log = QtCore.pyqtSignal(str)
    browser_ready = QtCore.pyqtSignal()
    launch_failed = QtCore.pyqtSignal(str)
    rejected = QtCore.pyqtSignal(str)
    extraction_finished = QtCore.pyqtSignal(object)

    do_extract = QtCore.pyqtSignal(int)

    def __init__(self, url: str, settings: config.ExtractionSettings):
        super().__init__()
        self.url = url
        self.settings = settings
        self.driver = None
        self.delay = Delay()

        # slots must run on this thread's event loop, not the GUI thread
        self.moveToThread(self)
        self.do_extract.connect(self._extract)

    def run(self):
        try:
            self.driver = browser.launch_browser(self.url, headless=self.settings.headless)
            self.log.emit("Browser launched. Open a YouTube video, then click Extract.")
            self.browser_ready.emit()
        except Exception as e:
            self.log.emit(f"Error launching browser: {e}")
            self.launch_failed.emit(str(e))
            return
        self.exec_()

    def stop(self):
        self.delay.cancel()
        try:
            if self.driver:
                self.driver.quit()
                self.driver = None
                self.log.emit("Browser closed.")
        except Exception:
            pass

    @QtCore.pyqtSlot(int)
    def _extract(self, target_count: int):
        if not self.driver:
            self.extraction_finished.emit(Outcome.delivery_failure("browser not running"))
            return

        document = SeleniumDocument(self.driver, container_wait=self.settings.container_wait_s)
        url = document.current_url()
        if not config.is_watch_page(url):
            self.rejected.emit("Error: Not on a YouTube video page.")
            return

        self.delay.reset()
        orchestrator = ExtractionOrchestrator(
            document,
            settings=self.settings,
            delay=self.delay,
            log_callback=self.log.emit,
        )
        try:
            outcome = orchestrator.run(target_count)
        except Exception as e:
            self.log.emit(f"Error during extraction: {e}")
            outcome = Outcome.delivery_failure(e)
        self.extraction_finished.emit(outcome)


class MainWindow(QtWidgets.QMainWindow):
    def __init__(self):
        super().__init__()
        self.setWindowTitle("YT Comment Exporter")
        self.resize(1100, 720)

        w = QtWidgets.QWidget()
        self.setCentralWidget(w)
        v = QtWidgets.QVBoxLayout(w)
        v.setContentsMargins(0,0,0,0)

        tb = QToolBar()
        tb.setMovable(False)
        tb.setIconSize(QSize(24, 24))
        tb.setToolButtonStyle(QtCore.Qt.ToolButtonTextBesideIcon)
        tb.setStyleSheet("""
            QToolBar { background: #ff4e45; border: none; padding: 4px; }
            QToolButton { color: #ffffff; font-weight: 600; padding: 6px 10px; border-radius: 8px; }
            QToolButton:hover { background: rgba(0,0,0,0.10); }
            QToolButton:pressed { background: rgba(0,0,0,0.18); }
        """)
        self.addToolBar(QtCore.Qt.TopToolBarArea, tb)

        app_ref = QtWidgets.QApplication.instance()

        def act(text, icon_name, slot, shortcut=None, tip=None):
            a = QAction(load_icon(app_ref, icon_name), text, self)
            if shortcut: a.setShortcut(shortcut)
            if tip: a.setToolTip(tip); a.setStatusTip(tip)
            a.triggered.connect(slot); tb.addAction(a); return a

        self.act_start   = act("Start",        "start",   self.start,          "Ctrl+R",     "Launch browser on the URL")
        self.act_stop    = act("Stop",         "stop",    self.stop,           "Esc",        "Stop scrolling and close browser")
        tb.addSeparator()
        self.act_extract = act("Extract",      "extract", self.on_extract,     "Ctrl+Enter", "Scroll the video page and export comments")
        self.act_export  = act("Export As…",   "export",  self.export_data,    "Ctrl+S",     "Save the table as CSV, Excel or JSON")
        self.act_open    = act("Open Folder",  "open",    self.open_output_dir, None,        "Open the output folder")
        tb.addSeparator()
        self.act_fit     = act("Fit Columns",  "fit",     self._autosize_columns, None,      "Auto fit the result columns")

        row_url = QtWidgets.QHBoxLayout(); row_url.setContentsMargins(6,6,6,4)
        url_label = QtWidgets.QLabel("URL:"); url_label.setMinimumWidth(28)
        self.url_input = QtWidgets.QLineEdit("https://www.youtube.com/"); self.url_input.setPlaceholderText("https://www.youtube.com/watch?v=…"); self.url_input.setMinimumHeight(30)
        row_url.addWidget(url_label); row_url.addWidget(self.url_input, 1)
        row_url.addSpacing(10); row_url.addWidget(QtWidgets.QLabel("Comments:"))
        self.count_input = QtWidgets.QLineEdit(str(config.DEFAULT_TARGET_COUNT)); self.count_input.setFixedWidth(72); self.count_input.setMinimumHeight(30)
        row_url.addWidget(self.count_input)
        row_url.addSpacing(10); row_url.addWidget(QtWidgets.QLabel("Scroll Delay (ms):"))
        self.scroll_delay = QtWidgets.QSpinBox(); self.scroll_delay.setRange(0, 30000); self.scroll_delay.setSingleStep(250); self.scroll_delay.setValue(config.SCROLL_DELAY_MS); self.scroll_delay.setMinimumWidth(72)
        row_url.addWidget(self.scroll_delay)
        self.headless = QtWidgets.QCheckBox("Headless")
        row_url.addSpacing(10); row_url.addWidget(self.headless)
        v.addLayout(row_url)

        self.status_label = QtWidgets.QLabel(""); self.status_label.setContentsMargins(8,0,8,4)
        v.addWidget(self.status_label)

        self.log = QtWidgets.QPlainTextEdit(); self.log.setReadOnly(True); self.log.setMinimumHeight(120)

        self.table = QtWidgets.QTableWidget()
        self.table.setSortingEnabled(False); self.table.setAlternatingRowColors(True); self.table.verticalHeader().setVisible(False)
        hh = self.table.horizontalHeader(); hh.setStretchLastSection(True); hh.setSectionResizeMode(QHeaderView.Interactive)

        split = QtWidgets.QSplitter(QtCore.Qt.Vertical); split.addWidget(self.log); split.addWidget(self.table); split.setSizes([220, 500]); split.setHandleWidth(6)
        v.addWidget(split, 1)

        sb = QtWidgets.QStatusBar(); sb.setStyleSheet("QStatusBar{background:#fff;border-top:1px solid #e7e7ea;}"); self.setStatusBar(sb)
        self.status = QtWidgets.QLabel("Total Comments: 0"); self.progress = QtWidgets.QProgressBar(); self.progress.setFixedWidth(180); self.progress.setVisible(False); self.progress.setTextVisible(False); self.progress.setMaximumHeight(12)
        sb.addPermanentWidget(self.status); sb.addPermanentWidget(self.progress)

        self.thread: ExporterThread = None
        self.records = []
        self.last_path = None

        self.apply_styles()
        self._set_enabled(start=True, stop=False, extract=False, export=False)

    def apply_styles(self):
        BORDER = "#e7e7ea"
        self.setStyleSheet(f"""
        * {{
            font-family: "Segoe UI", "Noto Sans", Arial;
            font-size: 13px;
        }}
        QMainWindow {{ background: #ffffff; }}
        QLineEdit, QSpinBox {{
            background: #ffffff;
            border: 1px solid {BORDER};
            border-radius: 6px;
            padding: 6px 8px;
        }}
        QPlainTextEdit {{
            background: #ffffff;
            border: 1px solid {BORDER};
            border-radius: 8px;
            padding: 6px;
        }}
        QTableView {{
            background: #ffffff;
            border: 1px solid {BORDER};
            border-radius: 8px;
            gridline-color: #eef2f7;
            selection-background-color: #ffd6d3;
            selection-color: #0d1b2a;
            alternate-background-color: #fafbfe;
        }}
        QHeaderView::section {{
            background: #f7f7f9;
            color: #1a1f36;
            border: none;
            border-right: 1px solid #e3e8ef;
            padding: 8px;
            font-weight: 600;
        }}
        QProgressBar {{
            background: #e9edf3;
            border: none;
            border-radius: 6px;
            height: 10px;
        }}
        QProgressBar::chunk {{ background-color: #ff4e45; border-radius: 6px; }}
        """)

    def _set_enabled(self, **kwargs):
        actmap = {
            "start": self.act_start,
            "stop": self.act_stop,
            "extract": self.act_extract,
            "export": self.act_export,
        }
        for key, val in kwargs.items():
            if key in actmap: actmap[key].setEnabled(bool(val))

    def update_status(self, message: str, severity: str = "busy"):
        self.status_label.setText(message)
        self.status_label.setStyleSheet(f"color: {STATUS_COLORS.get(severity, 'black')};")

    def _settings(self) -> config.ExtractionSettings:
        return config.ExtractionSettings(
            scroll_delay_ms=self.scroll_delay.value(),
            headless=self.headless.isChecked(),
        ).validate()

    def start(self):
        url = self.url_input.text().strip()
        if not url:
            QtWidgets.QMessageBox.warning(self, "Missing URL", "Please enter a YouTube URL.")
            return
        self.log.clear(); self.update_status("Starting browser…")

        self.thread = ExporterThread(url, self._settings())
        self.thread.log.connect(self.log.appendPlainText)
        self.thread.browser_ready.connect(self.on_browser_ready)
        self.thread.launch_failed.connect(self.on_launch_failed)
        self.thread.rejected.connect(self.on_rejected)
        self.thread.extraction_finished.connect(self.on_extraction_finished)
        self.thread.start()

        self._set_enabled(start=False, stop=True, extract=False, export=bool(self.records))

    def stop(self):
        if self.thread:
            self.thread.stop(); self.thread.quit(); self.thread.wait(3000); self.thread = None
        self._set_enabled(start=True, stop=False, extract=False, export=bool(self.records))
        self.update_status("Stopped."); self.progress.setVisible(False)

    def on_browser_ready(self):
        self._set_enabled(start=False, stop=True, extract=True, export=bool(self.records))
        self.update_status("Browser ready. Open a video and click Extract.", "info")

    def on_launch_failed(self, err: str):
        self.thread = None
        self._set_enabled(start=True, stop=False, extract=False, export=bool(self.records))
        self.update_status("Error: Failed to start the browser.", ERROR)
        QtWidgets.QMessageBox.critical(self, "Browser failed", f"Could not launch Chrome:\n{err}")

    def on_rejected(self, message: str):
        self.progress.setVisible(False)
        self._set_enabled(start=False, stop=True, extract=True, export=bool(self.records))
        self.update_status(message, ERROR)

    def on_extract(self):
        if not self.thread: return
        try:
            target = config.parse_target_count(self.count_input.text())
        except ValueError as e:
            self.update_status(f"Error: {e}", ERROR); return

        self.thread.settings = self._settings()
        QtWidgets.QMessageBox.information(self, "YT Comment Exporter",
            "Starting extraction.\n\nThe page will scroll automatically. Please do not close the browser.")
        self.update_status("Starting extraction, please wait…")
        self.progress.setVisible(True); self.progress.setMaximum(0); self.progress.setValue(0)
        self._set_enabled(start=False, stop=True, extract=False, export=False)
        self.thread.do_extract.emit(target)

    def on_extraction_finished(self, outcome: Outcome):
        self.progress.setVisible(False)
        if outcome.records:
            self.records = list(outcome.records); self.last_path = outcome.path
            self.show_preview(self.records)
        self._set_enabled(start=not self.thread, stop=bool(self.thread), extract=bool(self.thread), export=bool(self.records))
        self.update_status(outcome.message, outcome.severity)
        if outcome.severity == ERROR:
            QtWidgets.QMessageBox.warning(self, "YT Comment Exporter", outcome.message)
        else:
            QtWidgets.QMessageBox.information(self, "YT Comment Exporter", outcome.message)

    def show_preview(self, records):
        headers = ["No."] + list(FIELD_NAMES)
        self.table.setUpdatesEnabled(False); self.table.clear()
        self.table.setColumnCount(len(headers)); self.table.setHorizontalHeaderLabels(headers)
        self.table.setRowCount(len(records))
        for r, rec in enumerate(records):
            row = rec.as_dict()
            for c, key in enumerate(headers):
                val = str(r+1) if c == 0 else row.get(key, "")
                it = QtWidgets.QTableWidgetItem(val); it.setToolTip(val); self.table.setItem(r, c, it)
        self.table.setUpdatesEnabled(True)
        self.status.setText(f"Total Comments: {len(records)}")
        self._autosize_columns()

    def _autosize_columns(self):
        self.table.resizeColumnsToContents()
        try: self.table.setColumnWidth(0, 64)
        except Exception: pass

    def open_output_dir(self):
        os.makedirs(config.EXPORT_DIR, exist_ok=True)
        QtGui.QDesktopServices.openUrl(QtCore.QUrl.fromLocalFile(config.EXPORT_DIR))

    def closeEvent(self, event: QtGui.QCloseEvent):
        try: self.stop()
        except Exception: pass
        event.accept()

    def export_data(self):
        if not self.records:
            QtWidgets.QMessageBox.warning(self, "No data", "Nothing to export yet!"); return
        os.makedirs(config.EXPORT_DIR, exist_ok=True)
        start_name = self.last_path or os.path.join(config.EXPORT_DIR, "youtube_comments.xlsx")
        filename, _ = QtWidgets.QFileDialog.getSaveFileName(
            self, "Export comments", os.path.splitext(start_name)[0] + ".xlsx",
            "Excel (*.xlsx);;CSV (*.csv);;JSON (*.json)")
        if not filename: return
        try:
            utils.export_data(self.records, filename)

            msg = QtWidgets.QMessageBox(self); msg.setIcon(QtWidgets.QMessageBox.Information)
            msg.setWindowTitle("Exported"); msg.setText(f"Exported data to:\n{filename}\n\nOpen this file now?")
            open_btn = msg.addButton("Open", QtWidgets.QMessageBox.AcceptRole); msg.addButton("Close", QtWidgets.QMessageBox.RejectRole)
            msg.exec_()
            if msg.clickedButton() == open_btn:
                QtGui.QDesktopServices.openUrl(QtCore.QUrl.fromLocalFile(filename))
        except Exception as e:
            QtWidgets.QMessageBox.critical(self, "Export Failed", f"Could not export data:\n{e}")


def main():
    os.environ["QT_LOGGING_RULES"] = "qt.qpa.fonts.debug=false"
    QtWidgets.QApplication.setAttribute(QtCore.Qt.AA_EnableHighDpiScaling, True)
    QtWidgets.QApplication.setAttribute(QtCore.Qt.AA_UseHighDpiPixmaps, True)

    app = QtWidgets.QApplication(sys.argv)
    icon = find_resource("assets/icon.ico")
    if icon: app.setWindowIcon(QtGui.QIcon(icon))
    win = MainWindow(); win.show()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
