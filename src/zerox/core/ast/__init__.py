"""
0x abstract syntax tree.

Every construct is a frozen pydantic model. Top-level constructs, body
declarations and UI elements are registered node classes discriminated by
``type``; expressions, statements and type expressions are discriminated by
``kind``. All types are re-exported from this package.
"""

# Registry and locations
from .base import (
    NODE_FAMILIES,
    NODE_TYPES,
    Node,
    SourceLocation,
    family_members,
    node_union,
    register_node,
)

# Type expressions
from .type_exprs import (
    PRIMITIVE_TYPES,
    ListType,
    MapType,
    NamedType,
    NullableType,
    ObjectType,
    ObjectTypeField,
    PrimitiveType,
    SetType,
    TypeExpr,
    UnionType,
)

# Expressions
from .expressions import (
    ASSIGNMENT_OPERATORS,
    ArrayExpr,
    ArrowFunction,
    AssignmentExpr,
    AwaitExpr,
    BinaryExpr,
    BooleanLiteral,
    BracedExpr,
    CallExpr,
    Expr,
    Identifier,
    IndexExpr,
    MemberExpr,
    NullLiteral,
    NumberLiteral,
    ObjectExpr,
    ObjectProperty,
    OldExpr,
    StringLiteral,
    TemplateExpr,
    TernaryExpr,
    UnaryExpr,
)

# Statements
from .statements import (
    AssignmentStmt,
    ElifClause,
    ExprStmt,
    ForStmt,
    IfStmt,
    ReturnStmt,
    Statement,
    VarDecl,
)

# Body declarations and data layer
from .declarations import (
    ApiDecl,
    CheckDecl,
    Comment,
    DataDecl,
    DerivedDecl,
    Emit,
    FnDecl,
    FormDecl,
    FormField,
    FormSubmit,
    FormValidation,
    JsBlock,
    JsImport,
    Log,
    Model,
    ModelField,
    ModelPermission,
    ModelRule,
    OnDestroy,
    OnMount,
    Param,
    PropDecl,
    RealtimeDecl,
    RealtimeHandler,
    Retry,
    StateDecl,
    StoreDecl,
    StyleDecl,
    StyleProperty,
    TypeDecl,
    UseImport,
    WatchBlock,
)

# UI elements and patterns
from .ui import (
    A11y,
    Admin,
    Ai,
    Animate,
    Breadcrumb,
    Button,
    Cart,
    Chart,
    Command,
    ComponentCall,
    Confirm,
    Crud,
    Drawer,
    ElifBranch,
    ErrorBoundary,
    Faq,
    Features,
    Filter,
    Footer,
    ForBlock,
    Gesture,
    Hero,
    HideBlock,
    IfBlock,
    Image,
    Input,
    Layout,
    Link,
    List,
    Loading,
    Media,
    Modal,
    Nav,
    NavLink,
    Notification,
    Offline,
    Pay,
    Pricing,
    Profile,
    Responsive,
    Search,
    Select,
    Seo,
    ShowBlock,
    Social,
    Stat,
    StatsGrid,
    Table,
    TableColumn,
    Testimonial,
    Text,
    Toast,
    Toggle,
    UINode,
    Upload,
)

# App, infrastructure, backend, testing and i18n
from .infra import (
    AuthDecl,
    AuthGuard,
    Automation,
    AutomationSchedule,
    AutomationTrigger,
    Backup,
    Cache,
    Cdn,
    Ci,
    CiStep,
    Cron,
    Deploy,
    Dev,
    Docker,
    Domain,
    E2e,
    E2eStep,
    Endpoint,
    Env,
    EnvVar,
    Fixture,
    I18n,
    Locale,
    Middleware,
    Migrate,
    Mock,
    MockResponse,
    Monitor,
    Queue,
    Role,
    RoleDecl,
    RouteDecl,
    Rtl,
    Seed,
    Storage,
    Test,
    Translation,
    TranslationEntry,
    Webhook,
)

# Containers and unions
from .program import (
    CONTAINER_TYPES,
    App,
    BodyNode,
    Component,
    Page,
    TopLevelNode,
)

# Traversal
from .visitor import (
    iter_children,
    iter_identifiers,
    walk,
)

__all__ = [
    # Registry and locations
    "SourceLocation",
    "Node",
    "NODE_TYPES",
    "NODE_FAMILIES",
    "register_node",
    "family_members",
    "node_union",
    # Type expressions
    "PRIMITIVE_TYPES",
    "PrimitiveType",
    "ListType",
    "MapType",
    "SetType",
    "ObjectTypeField",
    "ObjectType",
    "UnionType",
    "NullableType",
    "NamedType",
    "TypeExpr",
    # Expressions
    "ASSIGNMENT_OPERATORS",
    "NumberLiteral",
    "StringLiteral",
    "BooleanLiteral",
    "NullLiteral",
    "Identifier",
    "MemberExpr",
    "IndexExpr",
    "CallExpr",
    "BinaryExpr",
    "UnaryExpr",
    "TernaryExpr",
    "ArrowFunction",
    "ArrayExpr",
    "ObjectProperty",
    "ObjectExpr",
    "TemplateExpr",
    "AssignmentExpr",
    "AwaitExpr",
    "OldExpr",
    "BracedExpr",
    "Expr",
    # Statements
    "ExprStmt",
    "ReturnStmt",
    "ElifClause",
    "IfStmt",
    "ForStmt",
    "VarDecl",
    "AssignmentStmt",
    "Statement",
    # Body declarations and data layer
    "Comment",
    "StateDecl",
    "DerivedDecl",
    "PropDecl",
    "TypeDecl",
    "StoreDecl",
    "ApiDecl",
    "Param",
    "FnDecl",
    "OnMount",
    "OnDestroy",
    "WatchBlock",
    "CheckDecl",
    "StyleProperty",
    "StyleDecl",
    "JsImport",
    "UseImport",
    "JsBlock",
    "ModelField",
    "ModelRule",
    "ModelPermission",
    "Model",
    "DataDecl",
    "FormValidation",
    "FormField",
    "FormSubmit",
    "FormDecl",
    "RealtimeHandler",
    "RealtimeDecl",
    "Emit",
    "Retry",
    "Log",
    # UI elements and patterns
    "Layout",
    "Text",
    "Button",
    "Input",
    "Image",
    "Link",
    "Toggle",
    "Select",
    "ComponentCall",
    "ElifBranch",
    "IfBlock",
    "ForBlock",
    "ShowBlock",
    "HideBlock",
    "TableColumn",
    "Table",
    "Chart",
    "Stat",
    "StatsGrid",
    "NavLink",
    "Nav",
    "Upload",
    "Modal",
    "Toast",
    "Crud",
    "List",
    "Drawer",
    "Command",
    "Confirm",
    "Pay",
    "Cart",
    "Media",
    "Notification",
    "Search",
    "Filter",
    "Social",
    "Profile",
    "Hero",
    "Features",
    "Pricing",
    "Faq",
    "Testimonial",
    "Footer",
    "Admin",
    "Seo",
    "A11y",
    "Animate",
    "Gesture",
    "Ai",
    "Breadcrumb",
    "Responsive",
    "ErrorBoundary",
    "Loading",
    "Offline",
    "UINode",
    # App, infrastructure, backend, testing and i18n
    "AuthGuard",
    "AuthDecl",
    "RouteDecl",
    "Role",
    "RoleDecl",
    "AutomationTrigger",
    "AutomationSchedule",
    "Automation",
    "Dev",
    "Deploy",
    "EnvVar",
    "Env",
    "Docker",
    "CiStep",
    "Ci",
    "Domain",
    "Cdn",
    "Monitor",
    "Backup",
    "Endpoint",
    "Middleware",
    "Queue",
    "Cron",
    "Cache",
    "Migrate",
    "Seed",
    "Webhook",
    "Storage",
    "Test",
    "E2eStep",
    "E2e",
    "MockResponse",
    "Mock",
    "Fixture",
    "TranslationEntry",
    "Translation",
    "I18n",
    "Locale",
    "Rtl",
    # Containers and unions
    "Page",
    "Component",
    "App",
    "BodyNode",
    "TopLevelNode",
    "CONTAINER_TYPES",
    # Traversal
    "iter_children",
    "walk",
    "iter_identifiers",
]
