#!/usr/bin/env python3
# src/qiuye_ui/catalog.py
"""
Static component catalog used by the documentation site.

Hand-authored, populated at import time and read-only afterwards. Nothing
here touches the network.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType


class ComponentId(str, Enum):
    """Identifiers of the components shipped by the library."""

    ANIMATED_BUTTON = "animated-button"
    GRADIENT_CARD = "gradient-card"
    TYPING_TEXT = "typing-text"
    RESPONSIVE_TABS = "responsive-tabs"
    SCROLLABLE_DIALOG = "scrollable-dialog"


COMPONENT_IDS: list[str] = [component_id.value for component_id in ComponentId]


@dataclass(frozen=True)
class PropInfo:
    name: str
    type: str
    description: str
    required: bool
    default: str | None = None


@dataclass(frozen=True)
class ComponentFiles:
    component: str
    demo: str | None = None
    types: str | None = None


@dataclass(frozen=True)
class ComponentInfo:
    """Catalog entry for one component as shown on the site."""

    name: str
    description: str
    category: str
    dependencies: tuple[str, ...]
    files: ComponentFiles
    version: str
    author: str
    tags: tuple[str, ...]
    cli_name: str
    props: tuple[PropInfo, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class BasicUsageExample:
    import_snippet: str
    usage: str


COMPONENT_REGISTRY: Mapping[str, ComponentInfo] = MappingProxyType(
    {
        ComponentId.ANIMATED_BUTTON.value: ComponentInfo(
            name="Animated Button",
            description="带有动画效果的按钮组件，支持多种动画风格和悬停效果",
            category="按钮",
            dependencies=("motion", "class-variance-authority", "clsx"),
            files=ComponentFiles(
                component="components/qiuye-ui/animated-button.tsx",
                demo="components/qiuye-ui/demos/animated-button-demo.tsx",
            ),
            props=(
                PropInfo("variant", '"primary" | "secondary" | "outline" | "ghost"', "按钮变体", False, "primary"),
                PropInfo("size", '"sm" | "md" | "lg"', "按钮尺寸", False, "md"),
                PropInfo("animation", '"bounce" | "pulse" | "wiggle" | "spin"', "动画类型", False, "bounce"),
                PropInfo("children", "React.ReactNode", "按钮内容", True),
                PropInfo("disabled", "boolean", "是否禁用", False, "false"),
            ),
            version="1.0.0",
            author="秋夜",
            tags=("button", "animation", "interactive"),
            cli_name="animated-button",
        ),
        ComponentId.GRADIENT_CARD.value: ComponentInfo(
            name="Gradient Card",
            description="渐变色卡片组件，支持多种渐变样式和阴影效果",
            category="卡片",
            dependencies=("class-variance-authority", "clsx"),
            files=ComponentFiles(
                component="components/qiuye-ui/gradient-card.tsx",
                demo="components/qiuye-ui/demos/gradient-card-demo.tsx",
            ),
            props=(
                PropInfo("gradient", '"blue" | "purple" | "pink" | "orange" | "green"', "渐变颜色主题", False, "blue"),
                PropInfo("intensity", '"light" | "medium" | "strong"', "渐变强度", False, "medium"),
                PropInfo("children", "React.ReactNode", "卡片内容", True),
                PropInfo("className", "string", "额外的CSS类名", False),
            ),
            version="1.0.0",
            author="秋夜",
            tags=("card", "gradient", "design"),
            cli_name="gradient-card",
        ),
        ComponentId.TYPING_TEXT.value: ComponentInfo(
            name="Typing Text",
            description="打字机效果文本组件，支持自定义打字速度和光标样式",
            category="文本",
            dependencies=("react", "ahooks"),
            files=ComponentFiles(
                component="components/qiuye-ui/typing-text.tsx",
                demo="components/qiuye-ui/demos/typing-text-demo.tsx",
            ),
            props=(
                PropInfo("text", "string | string[]", "要显示的文本或文本数组", True),
                PropInfo("speed", "number", "打字速度（毫秒）", False, "100"),
                PropInfo("loop", "boolean", "是否循环播放", False, "false"),
                PropInfo("showCursor", "boolean", "是否显示光标", False, "true"),
                PropInfo("className", "string", "额外的CSS类名", False),
            ),
            version="1.0.0",
            author="秋夜",
            tags=("text", "animation", "typewriter"),
            cli_name="typing-text",
        ),
    }
)


BASIC_USAGE_EXAMPLES: Mapping[str, BasicUsageExample] = MappingProxyType(
    {
        ComponentId.ANIMATED_BUTTON.value: BasicUsageExample(
            import_snippet='import { AnimatedButton } from "@/components/qiuye-ui/animated-button";',
            usage='<AnimatedButton animation="bounce" variant="primary">\n  点击我\n</AnimatedButton>',
        ),
        ComponentId.GRADIENT_CARD.value: BasicUsageExample(
            import_snippet='import { GradientCard } from "@/components/qiuye-ui/gradient-card";',
            usage=(
                '<GradientCard gradient="blue">\n'
                '  <div className="p-6">\n'
                '    <h3 className="text-lg font-semibold">卡片标题</h3>\n'
                '    <p className="text-muted-foreground">这是卡片内容</p>\n'
                "  </div>\n"
                "</GradientCard>"
            ),
        ),
        ComponentId.TYPING_TEXT.value: BasicUsageExample(
            import_snippet='import { TypingText } from "@/components/qiuye-ui/typing-text";',
            usage='<TypingText\n  text="Hello, 这是打字效果！"\n  speed={100}\n  showCursor={true}\n/>',
        ),
        ComponentId.RESPONSIVE_TABS.value: BasicUsageExample(
            import_snippet=(
                'import { ResponsiveTabs } from "@/components/qiuye-ui/responsive-tabs";\n'
                'import { useState } from "react";'
            ),
            usage=(
                'const [value, setValue] = useState("tab1");\n'
                "const items = [\n"
                '  { value: "tab1", label: "标签一" },\n'
                '  { value: "tab2", label: "标签二" },\n'
                "];\n"
                "\n"
                "return (\n"
                "  <ResponsiveTabs value={value} onValueChange={setValue} items={items}>\n"
                '    <div className="p-4">\n'
                '      {value === "tab1" && <div>标签一的内容</div>}\n'
                '      {value === "tab2" && <div>标签二的内容</div>}\n'
                "    </div>\n"
                "  </ResponsiveTabs>\n"
                ");"
            ),
        ),
        ComponentId.SCROLLABLE_DIALOG.value: BasicUsageExample(
            import_snippet=(
                "import {\n"
                "  ScrollableDialog,\n"
                "  ScrollableDialogHeader,\n"
                "  ScrollableDialogContent,\n"
                "  ScrollableDialogFooter,\n"
                "  DialogTitle,\n"
                "  DialogDescription,\n"
                '} from "@/components/qiuye-ui/scrollable-dialog";\n'
                'import { useState } from "react";\n'
                'import { Button } from "@/components/ui/button";'
            ),
            usage=(
                "const [open, setOpen] = useState(false);\n"
                "\n"
                "return (\n"
                "  <>\n"
                "    <Button onClick={() => setOpen(true)}>打开对话框</Button>\n"
                "    <ScrollableDialog open={open} onOpenChange={setOpen}>\n"
                "      <ScrollableDialogHeader>\n"
                "        <DialogTitle>标题</DialogTitle>\n"
                "        <DialogDescription>描述</DialogDescription>\n"
                "      </ScrollableDialogHeader>\n"
                "      <ScrollableDialogContent>\n"
                "        <p>这里是对话框的内容</p>\n"
                "      </ScrollableDialogContent>\n"
                "      <ScrollableDialogFooter>\n"
                "        <Button onClick={() => setOpen(false)}>确认</Button>\n"
                "      </ScrollableDialogFooter>\n"
                "    </ScrollableDialog>\n"
                "  </>\n"
                ");"
            ),
        ),
    }
)


def get_all_components() -> list[ComponentInfo]:
    """All catalog entries in insertion order."""
    return list(COMPONENT_REGISTRY.values())


def get_categories() -> set[str]:
    """Distinct categories."""
    return {component.category for component in COMPONENT_REGISTRY.values()}


def get_components_by_category(category: str) -> list[ComponentInfo]:
    return [component for component in COMPONENT_REGISTRY.values() if component.category == category]


def get_component(component_id: str) -> ComponentInfo | None:
    return COMPONENT_REGISTRY.get(component_id)


def search_components(query: str) -> list[ComponentInfo]:
    """Case-insensitive substring match on name, description or any tag."""
    needle = query.lower()
    return [
        component
        for component in COMPONENT_REGISTRY.values()
        if needle in component.name.lower()
        or needle in component.description.lower()
        or any(needle in tag.lower() for tag in component.tags)
    ]


def get_basic_usage_example(component_id: str) -> BasicUsageExample | None:
    return BASIC_USAGE_EXAMPLES.get(component_id)


__all__ = [
    "ComponentId",
    "COMPONENT_IDS",
    "PropInfo",
    "ComponentFiles",
    "ComponentInfo",
    "BasicUsageExample",
    "COMPONENT_REGISTRY",
    "BASIC_USAGE_EXAMPLES",
    "get_all_components",
    "get_categories",
    "get_components_by_category",
    "get_component",
    "search_components",
    "get_basic_usage_example",
]
