from .document import SpecMetadata, SpecProtection, SpecTheme
from .package import EnumPartKind, SpecPackagePart, SpecRelatedPart
from .plugin import (
    EnumPluginQueue,
    EnumReaderPartId,
    EnumWriterPartId,
    Plugin,
    PluginFactory,
    SpecPluginDescriptor,
    SpecPluginEntry,
)
from .reader import EnumColumnType, EnumGlobalEnforcing, SpecReaderOptions
from .report import ReportRead, ReportWrite
from .style import (
    DEFAULT_STYLE,
    EnumBorderStyle,
    EnumFontScheme,
    EnumHorizontalAlign,
    EnumPatternFill,
    EnumStyleComponent,
    EnumTextBreak,
    EnumUnderline,
    EnumVerticalAlign,
    EnumVerticalTextAlign,
    SpecBorder,
    SpecCellXf,
    SpecFill,
    SpecFont,
    SpecNumberFormat,
    SpecStyle,
    StyleComponent,
)
from .text import FormattableText, SpecRichText, SpecTextRun
from .writer import SpecWriteOptions

__all__ = [
    "DEFAULT_STYLE",
    "EnumBorderStyle",
    "EnumColumnType",
    "EnumFontScheme",
    "EnumGlobalEnforcing",
    "EnumHorizontalAlign",
    "EnumPartKind",
    "EnumPatternFill",
    "EnumPluginQueue",
    "EnumReaderPartId",
    "EnumStyleComponent",
    "EnumTextBreak",
    "EnumUnderline",
    "EnumVerticalAlign",
    "EnumVerticalTextAlign",
    "EnumWriterPartId",
    "FormattableText",
    "Plugin",
    "PluginFactory",
    "ReportRead",
    "ReportWrite",
    "SpecBorder",
    "SpecCellXf",
    "SpecFill",
    "SpecFont",
    "SpecMetadata",
    "SpecNumberFormat",
    "SpecPackagePart",
    "SpecPluginDescriptor",
    "SpecPluginEntry",
    "SpecProtection",
    "SpecReaderOptions",
    "SpecRelatedPart",
    "SpecRichText",
    "SpecStyle",
    "SpecTextRun",
    "SpecTheme",
    "SpecWriteOptions",
    "StyleComponent",
]
