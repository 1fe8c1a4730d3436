"""
Logo editor widget with syntax highlighting and dark mode.
"""
from PySide6.QtWidgets import QPlainTextEdit, QWidget, QTextEdit
from PySide6.QtGui import (QColor, QTextFormat, QPainter, QFont, QSyntaxHighlighter,
                           QTextCharFormat, QPalette)
from PySide6.QtCore import Qt, QRect, QSize
import re


class LogoHighlighter(QSyntaxHighlighter):
    """Turtle Logo syntax highlighter with dark mode colors."""

    MOTION = {'FD', 'BK', 'RT', 'LT', 'HOME', 'SETPOS', 'SETHEADING'}
    PEN = {'PU', 'PD', 'PENCOLOR', 'PENSIZE', 'HUESTEP', 'RAINBOW', 'CS', 'ZOOM'}
    CONTROL = {'REPEAT', 'PLOT'}
    OPTIONS = {'FROM', 'TO', 'STEPS', 'AT', 'SMOOTH', 'DOTS', 'COLOR',
               'ON', 'OFF', 'IN', 'OUT'}

    WORD_PATTERN = re.compile(r'[^\s\[\],;]+')
    NUMBER_PATTERN = re.compile(r'-?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$')

    def __init__(self, document):
        super().__init__(document)

        font = QFont('Consolas', 11)
        font.setFixedPitch(True)

        self.motion_format = self._make_format('#51cf66', font, bold=True)
        self.pen_format = self._make_format('#74c0fc', font, bold=True)
        self.control_format = self._make_format('#ffd43b', font, bold=True)
        self.option_format = self._make_format('#ff8cc8', font)
        self.number_format = self._make_format('#ffcc99', font)
        self.bracket_format = self._make_format('#cc99ff', font)
        self.expression_format = self._make_format('#dda0dd', font)

        self.comment_format = self._make_format('#6c757d', font)
        self.comment_format.setFontItalic(True)

    @staticmethod
    def _make_format(color, font, bold=False):
        fmt = QTextCharFormat()
        fmt.setForeground(QColor(color))
        fmt.setFont(font)
        if bold:
            fmt.setFontWeight(QFont.Weight.Bold)
        return fmt

    def highlightBlock(self, text):
        """Apply syntax highlighting to a block of text."""
        comment_pos = text.find(';')
        if comment_pos >= 0:
            self.setFormat(comment_pos, len(text) - comment_pos, self.comment_format)
            text = text[:comment_pos]

        for i, char in enumerate(text):
            if char in '[],':
                self.setFormat(i, 1, self.bracket_format)

        after_plot = False
        for match in self.WORD_PATTERN.finditer(text):
            word = match.group(0)
            upper = word.upper()
            start, length = match.start(), len(word)

            if after_plot:
                self.setFormat(start, length, self.expression_format)
                after_plot = False
            elif upper in self.MOTION:
                self.setFormat(start, length, self.motion_format)
            elif upper in self.PEN:
                self.setFormat(start, length, self.pen_format)
            elif upper in self.CONTROL:
                self.setFormat(start, length, self.control_format)
                after_plot = upper == 'PLOT'
            elif upper in self.OPTIONS:
                self.setFormat(start, length, self.option_format)
            elif self.NUMBER_PATTERN.match(word):
                self.setFormat(start, length, self.number_format)


class LineNumberArea(QWidget):
    """Line number area widget for the editor."""

    def __init__(self, editor):
        super().__init__(editor)
        self.editor = editor

    def sizeHint(self):
        return QSize(self.editor.lineNumberAreaWidth(), 0)

    def paintEvent(self, event):
        self.editor.lineNumberAreaPaintEvent(event)


class Editor(QPlainTextEdit):
    """Logo editor with line numbers, error lines and the running line marked."""

    def __init__(self, parent=None):
        super().__init__(parent)

        self.setup_dark_mode()

        self.lineNumberArea = LineNumberArea(self)

        self.error_lines = set()
        self.active_line = 0

        self.setup_editor()

        self.highlighter = LogoHighlighter(self.document())

        self.blockCountChanged.connect(self.updateLineNumberAreaWidth)
        self.updateRequest.connect(self.updateLineNumberArea)
        self.cursorPositionChanged.connect(self.update_extra_selections)

    def setup_dark_mode(self):
        palette = self.palette()
        palette.setColor(QPalette.Base, QColor('#2b2b2b'))
        palette.setColor(QPalette.Text, QColor('#f8f8f2'))
        palette.setColor(QPalette.Highlight, QColor('#44475a'))
        palette.setColor(QPalette.HighlightedText, QColor('#f8f8f2'))
        self.setPalette(palette)

    def setup_editor(self):
        self.setLineWrapMode(QPlainTextEdit.NoWrap)

        font = QFont("Consolas", 11)
        if not font.exactMatch():
            font = QFont("Courier New", 11)
        font.setStyleHint(QFont.StyleHint.Monospace)
        font.setFixedPitch(True)
        self.setFont(font)

        tab_width = self.fontMetrics().horizontalAdvance(' ') * 2
        self.setTabStopDistance(tab_width)

        self.updateLineNumberAreaWidth(0)

    def highlight_error_lines(self, lines):
        self.error_lines = set(lines) if lines else set()
        self.update_extra_selections()
        self.lineNumberArea.update()

    def clear_error_highlights(self):
        self.error_lines.clear()
        self.update_extra_selections()
        self.lineNumberArea.update()

    def set_active_line(self, line_number):
        """Mark the line of the command that just ran (0 clears it)."""
        if line_number != self.active_line:
            self.active_line = line_number
            self.update_extra_selections()

    def update_extra_selections(self):
        """Current line, running line and error lines."""
        selections = []

        if not self.isReadOnly():
            selection = QTextEdit.ExtraSelection()
            selection.format.setBackground(QColor('#3a3a3a'))
            selection.format.setProperty(QTextFormat.FullWidthSelection, True)
            selection.cursor = self.textCursor()
            selection.cursor.clearSelection()
            selections.append(selection)

        if self.active_line > 0 and self.active_line not in self.error_lines:
            selections.extend(self._line_selection(self.active_line, '#1e3a8a'))

        for line_num in self.error_lines:
            selections.extend(self._line_selection(line_num, '#660000'))

        self.setExtraSelections(selections)

    def _line_selection(self, line_number, color):
        block = self.document().findBlockByNumber(line_number - 1)
        if line_number <= 0 or not block.isValid():
            return []
        selection = QTextEdit.ExtraSelection()
        selection.format.setBackground(QColor(color))
        selection.format.setProperty(QTextFormat.FullWidthSelection, True)
        selection.cursor = self.textCursor()
        selection.cursor.setPosition(block.position())
        selection.cursor.clearSelection()
        return [selection]

    # Line number area methods
    def lineNumberAreaWidth(self):
        digits = len(str(max(1, self.blockCount())))
        return 3 + self.fontMetrics().horizontalAdvance('9') * digits

    def updateLineNumberAreaWidth(self, _):
        self.setViewportMargins(self.lineNumberAreaWidth(), 0, 0, 0)

    def updateLineNumberArea(self, rect, dy):
        if dy:
            self.lineNumberArea.scroll(0, dy)
        else:
            self.lineNumberArea.update(0, rect.y(), self.lineNumberArea.width(), rect.height())

        if rect.contains(self.viewport().rect()):
            self.updateLineNumberAreaWidth(0)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        cr = self.contentsRect()
        self.lineNumberArea.setGeometry(QRect(cr.left(), cr.top(), self.lineNumberAreaWidth(), cr.height()))

    def lineNumberAreaPaintEvent(self, event):
        painter = QPainter(self.lineNumberArea)
        painter.fillRect(event.rect(), QColor('#383838'))

        block = self.firstVisibleBlock()
        blockNumber = block.blockNumber()
        top = self.blockBoundingGeometry(block).translated(self.contentOffset()).top()
        bottom = top + self.blockBoundingRect(block).height()

        while block.isValid() and top <= event.rect().bottom():
            if block.isVisible() and bottom >= event.rect().top():
                number = str(blockNumber + 1)
                if (blockNumber + 1) in self.error_lines:
                    painter.setPen(QColor('#ff6b6b'))
                else:
                    painter.setPen(QColor('#6c757d'))
                painter.drawText(0, int(top), self.lineNumberArea.width() - 3,
                                 self.fontMetrics().height(), Qt.AlignRight, number)

            block = block.next()
            top = bottom
            bottom = top + self.blockBoundingRect(block).height()
            blockNumber += 1

    def goto_line(self, line_number):
        if line_number > 0:
            block = self.document().findBlockByNumber(line_number - 1)
            if block.isValid():
                cursor = self.textCursor()
                cursor.setPosition(block.position())
                self.setTextCursor(cursor)
                self.centerCursor()
