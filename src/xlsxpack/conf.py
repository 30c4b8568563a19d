from collections.abc import Mapping
from types import MappingProxyType

################################################################################
# #region Namespaces
NS_MAIN = "http://schemas.openxmlformats.org/spreadsheetml/2006/main"
NS_REL = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
NS_PKG_REL = "http://schemas.openxmlformats.org/package/2006/relationships"
NS_CONTENT_TYPES = "http://schemas.openxmlformats.org/package/2006/content-types"
NS_MC = "http://schemas.openxmlformats.org/markup-compatibility/2006"
NS_X14AC = "http://schemas.microsoft.com/office/spreadsheetml/2009/9/ac"
NS_DRAWING = "http://schemas.openxmlformats.org/drawingml/2006/main"
NS_CORE_PROPS = (
    "http://schemas.openxmlformats.org/package/2006/metadata/core-properties"
)
NS_APP_PROPS = (
    "http://schemas.openxmlformats.org/officeDocument/2006/extended-properties"
)
NS_VT = "http://schemas.openxmlformats.org/officeDocument/2006/docPropsVTypes"
NS_DC = "http://purl.org/dc/elements/1.1/"
NS_DCTERMS = "http://purl.org/dc/terms/"
NS_DCMITYPE = "http://purl.org/dc/dcmitype/"
NS_XSI = "http://www.w3.org/2001/XMLSchema-instance"

XML_DECLARATION = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\r\n'
)

# #endregion
################################################################################
# #region ContentAndRelationshipTypes
CT_RELATIONSHIPS = "application/vnd.openxmlformats-package.relationships+xml"
CT_XML = "application/xml"
CT_WORKBOOK = (
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet.main+xml"
)
CT_WORKSHEET = (
    "application/vnd.openxmlformats-officedocument.spreadsheetml.worksheet+xml"
)
CT_STYLES = (
    "application/vnd.openxmlformats-officedocument.spreadsheetml.styles+xml"
)
CT_SHARED_STRINGS = (
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sharedStrings+xml"
)
CT_THEME = "application/vnd.openxmlformats-officedocument.theme+xml"
CT_CORE_PROPS = "application/vnd.openxmlformats-package.core-properties+xml"
CT_APP_PROPS = (
    "application/vnd.openxmlformats-officedocument.extended-properties+xml"
)

RT_OFFICE_DOCUMENT = f"{NS_REL}/officeDocument"
RT_WORKSHEET = f"{NS_REL}/worksheet"
RT_STYLES = f"{NS_REL}/styles"
RT_SHARED_STRINGS = f"{NS_REL}/sharedStrings"
RT_THEME = f"{NS_REL}/theme"
RT_CORE_PROPS = f"{NS_PKG_REL}/metadata/core-properties"
RT_APP_PROPS = f"{NS_REL}/extended-properties"

# #endregion
################################################################################
# #region PackagePaths
PATH_CONTENT_TYPES = "[Content_Types].xml"
PATH_ROOT_RELS = "_rels/.rels"
PATH_WORKBOOK = "xl/workbook.xml"
PATH_WORKBOOK_RELS = "xl/_rels/workbook.xml.rels"
PATH_STYLES = "xl/styles.xml"
PATH_SHARED_STRINGS = "xl/sharedStrings.xml"
PATH_THEME = "xl/theme/theme1.xml"
PATH_CORE_PROPS = "docProps/core.xml"
PATH_APP_PROPS = "docProps/app.xml"
PATH_WORKSHEET_FMT = "xl/worksheets/sheet{n}.xml"
DIR_WORKBOOK = "xl/"

# #endregion
################################################################################
# #region OrderBands
N_ORDER_WORKBOOK = 0
N_ORDER_METADATA_START = 1_000
N_ORDER_SHEET_START = 10_000
N_ORDER_POST_SHEET_START = 2_000_000
N_ORDER_STEP = 1_000

# #endregion
################################################################################
# #region StyleDefaults
N_CUSTOM_NUMBER_FORMAT_START = 164
C_DEFAULT_COLOR = "FF000000"
N_DEFAULT_INDEXED_COLOR = 64
C_DEFAULT_FONT_NAME = "Calibri"
N_DEFAULT_FONT_SIZE = 11.0
N_DEFAULT_FONT_FAMILY = 2
N_DEFAULT_FONT_THEME = 1
N_TEXT_ROTATION_VERTICAL = 255

SET_DATE_FORMAT_IDS = frozenset({14, 15, 16, 17, 22})
SET_TIME_FORMAT_IDS = frozenset({18, 19, 20, 21, 45, 46, 47})

N_FORMAT_DATE = 14
N_FORMAT_DATETIME = 22
N_FORMAT_TIME = 21

NUM_FMT_BUILTIN: Mapping[int, str] = MappingProxyType(
    {
        0: "General",
        1: "0",
        2: "0.00",
        3: "#,##0",
        4: "#,##0.00",
        5: "$#,##0_);($#,##0)",
        6: "$#,##0_);[Red]($#,##0)",
        7: "$#,##0.00_);($#,##0.00)",
        8: "$#,##0.00_);[Red]($#,##0.00)",
        9: "0%",
        10: "0.00%",
        11: "0.00E+00",
        12: "# ?/?",
        13: "# ??/??",
        14: "mm-dd-yy",
        15: "d-mmm-yy",
        16: "d-mmm",
        17: "mmm-yy",
        18: "h:mm AM/PM",
        19: "h:mm:ss AM/PM",
        20: "h:mm",
        21: "h:mm:ss",
        22: "m/d/yy h:mm",
        37: "#,##0_);(#,##0)",
        38: "#,##0_);[Red](#,##0)",
        39: "#,##0.00_);(#,##0.00)",
        40: "#,##0.00_);[Red](#,##0.00)",
        45: "mm:ss",
        46: "[h]:mm:ss",
        47: "mmss.0",
        48: "##0.0E+0",
        49: "@",
    }
)

# #endregion
################################################################################
# #region Worksheet
N_LEN_SHEET_NAME_MAX = 31
SET_SHEET_NAME_FORBIDDEN = frozenset("[]*?:/\\")
N_ROW_MAX = 1_048_575
N_COL_MAX = 16_383

# #endregion
################################################################################
# #region Theme
TUP_THEME_COLOR_SLOTS = (
    "dk1",
    "lt1",
    "dk2",
    "lt2",
    "accent1",
    "accent2",
    "accent3",
    "accent4",
    "accent5",
    "accent6",
    "hlink",
    "folHlink",
)
THEME_DEFAULT_COLORS: Mapping[str, str] = MappingProxyType(
    {
        "dk1": "000000",
        "lt1": "FFFFFF",
        "dk2": "44546A",
        "lt2": "E7E6E6",
        "accent1": "4472C4",
        "accent2": "ED7D31",
        "accent3": "A5A5A5",
        "accent4": "FFC000",
        "accent5": "5B9BD5",
        "accent6": "70AD47",
        "hlink": "0563C1",
        "folHlink": "954F72",
    }
)

# #endregion
