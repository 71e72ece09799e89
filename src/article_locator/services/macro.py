"""
Spreadsheet double-click macro.

Generates VBA for a worksheet module: double-clicking a cell passes its value
to ``<executable> lookup "<value>"``. Pasting the code into the workbook is
left to the user.
"""

DOUBLE_CLICK_MACRO = """Private Sub Worksheet_BeforeDoubleClick(ByVal Target As Range, Cancel As Boolean)
    Dim cellValue As String
    Dim shellCommand As String

    If Target.Cells.Count > 1 Then Exit Sub
    cellValue = Trim(CStr(Target.Value))
    If cellValue = "" Then Exit Sub

    Cancel = True
    cellValue = Replace(cellValue, Chr(34), "")
    shellCommand = "{executable} lookup " & Chr(34) & cellValue & Chr(34)
    Call Shell(shellCommand, vbNormalFocus)
End Sub
"""


def _vba_command_prefix(executable: str) -> str:
    """Executable as it appears inside the VBA string literal."""
    executable = executable.strip().replace('"', "")
    if " " in executable:
        # Quoted on the command line; "" is an escaped quote in VBA
        return f'""{executable}""'
    return executable


def build_double_click_macro(executable: str = "article-locator") -> str:
    """Return the Worksheet_BeforeDoubleClick handler calling ``executable``."""
    return DOUBLE_CLICK_MACRO.format(executable=_vba_command_prefix(executable))
