"""
Fixed data used by the annotation pass.

Everything here is immutable and loaded once at import time.
"""

from typing import FrozenSet, Tuple


# =============================================================================
# Attribute Names
# =============================================================================

WEB_COMPONENT_NAME = "data-sentry-component"
WEB_ELEMENT_NAME = "data-sentry-element"
WEB_SOURCE_FILE_NAME = "data-sentry-source-file"

NATIVE_COMPONENT_NAME = "dataSentryComponent"
NATIVE_ELEMENT_NAME = "dataSentryElement"
NATIVE_SOURCE_FILE_NAME = "dataSentrySourceFile"

# Returned by the name resolver for tag names it cannot render
UNKNOWN_ELEMENT_NAME = "unknown"


# =============================================================================
# Element Sets
# =============================================================================

# Intrinsic tags that never get an element-name attribute. These either
# render nothing visible or only structure the document, so tagging them
# adds noise to replays without helping anyone find the source.
DEFAULT_IGNORED_ELEMENTS: FrozenSet[str] = frozenset({
    "base",
    "body",
    "br",
    "col",
    "head",
    "hr",
    "html",
    "link",
    "meta",
    "noscript",
    "script",
    "slot",
    "source",
    "style",
    "template",
    "title",
    "track",
    "wbr",
})

# React Native primitives are PascalCase but still host elements
REACT_NATIVE_ELEMENTS: FrozenSet[str] = frozenset({
    "Image",
    "Text",
    "View",
    "ScrollView",
    "TextInput",
    "TouchableOpacity",
    "TouchableHighlight",
    "TouchableWithoutFeedback",
    "FlatList",
    "SectionList",
    "ActivityIndicator",
    "Button",
    "Switch",
    "Modal",
    "SafeAreaView",
    "StatusBar",
    "KeyboardAvoidingView",
    "RefreshControl",
    "Picker",
    "Slider",
})


# =============================================================================
# Module Names
# =============================================================================

# Import sources that provide Fragment and the React namespace
REACT_MODULE_NAMES: FrozenSet[str] = frozenset({"react", "React"})

# Namespace name assumed even without an explicit import
DEFAULT_NAMESPACE = "React"

FRAGMENT_NAME = "Fragment"

# Packages whose installed sources must never be annotated
KNOWN_INCOMPATIBLE_PACKAGES: Tuple[str, ...] = (
    # Might prevent clicks from registering
    "react-native-testing-library",
    # Inspects component props and breaks on the injected ones
    "@react-navigation",
)
