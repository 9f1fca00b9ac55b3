from __future__ import annotations

from typing import Sequence

from lxml import etree
from lxml import html as lxml_html

from .config import LEGEND_LABELS, SIDE_LABEL, SUBTITLE, TITLE, X_LABEL, Y_LABEL, ChartLayout
from .records import Record
from .scales import Axis, ChartScales
from .tooltip import POINTER_OFFSET_Y, VISIBLE_OPACITY, TooltipController


DOT_RADIUS = 6
TICK_SIZE = 6
LEGEND_SWATCH = 18
LEGEND_SPACING = 20


def render_scatterplot(
    records: Sequence[Record],
    *,
    layout: ChartLayout,
    scales: ChartScales,
    tooltip: TooltipController,
) -> etree._Element:
    """Build the chart as a <body> element: tooltip panel followed by the svg."""
    width = layout.width
    height = layout.height
    margin = layout.margin

    body = etree.Element("body")
    etree.SubElement(
        body,
        "div",
        {
            "class": "tooltip",
            "id": "tooltip",
            "style": tooltip.style(),
            "data-visible-opacity": _num(VISIBLE_OPACITY),
            "data-offset-y": _num(POINTER_OFFSET_Y),
        },
    )

    svg = etree.SubElement(
        body,
        "svg",
        {"width": _num(layout.canvas_width), "height": _num(layout.canvas_height), "class": "graph"},
    )
    plot = etree.SubElement(svg, "g", {"transform": f"translate({_num(margin.left)},{_num(margin.top)})"})

    x_axis = _draw_axis(plot, scales.x_axis, axis_id="x-axis", css_class="x axis", length=width)
    x_axis.set("transform", f"translate(0,{_num(height)})")
    _text(
        x_axis,
        X_LABEL,
        {"class": "x-axis-label", "x": _num(width), "y": "-6", "fill": "currentColor", "style": "text-anchor: end"},
    )

    y_axis = _draw_axis(plot, scales.y_axis, axis_id="y-axis", css_class="y axis", length=height)
    _text(
        y_axis,
        Y_LABEL,
        {
            "class": "label",
            "transform": "rotate(-90)",
            "y": "6",
            "dy": ".71em",
            "fill": "currentColor",
            "style": "text-anchor: end",
        },
    )

    _text(plot, SIDE_LABEL, {"transform": "rotate(-90)", "x": "-160", "y": "-44", "style": "font-size: 18px"})

    for record in records:
        etree.SubElement(
            plot,
            "circle",
            {
                "class": "dot",
                "r": _num(DOT_RADIUS),
                "cx": _num(scales.x(record.year)),
                "cy": _num(scales.y(record.time)),
                "data-xvalue": str(record.year),
                "data-yvalue": record.time_iso,
                "data-tooltip": tooltip.content(record),
                "style": f"fill: {scales.color(record.has_doping)}",
            },
        )

    _text(
        plot,
        TITLE,
        {
            "id": "title",
            "x": _num(width / 2),
            "y": _num(-margin.top / 2),
            "text-anchor": "middle",
            "style": "font-size: 30px",
        },
    )
    _text(
        plot,
        SUBTITLE,
        {
            "x": _num(width / 2),
            "y": _num(-margin.top / 2 + 25),
            "text-anchor": "middle",
            "style": "font-size: 20px",
        },
    )

    _draw_legend(plot, scales, width=width, height=height)
    return body


def render_document(
    records: Sequence[Record],
    *,
    layout: ChartLayout,
    scales: ChartScales,
    tooltip: TooltipController,
) -> str:
    root = etree.Element("html", {"lang": "en"})
    head = etree.SubElement(root, "head")
    etree.SubElement(head, "meta", {"charset": "utf-8"})
    _text(head, TITLE, {}, tag="title")
    etree.SubElement(head, "link", {"rel": "stylesheet", "href": "static/styles.css"})

    body = render_scatterplot(records, layout=layout, scales=scales, tooltip=tooltip)
    etree.SubElement(body, "script", {"src": "static/tooltip.js"}).text = ""
    root.append(body)

    return lxml_html.tostring(root, doctype="<!DOCTYPE html>", encoding="unicode", pretty_print=True)


def _draw_axis(parent: etree._Element, axis: Axis, *, axis_id: str, css_class: str, length: float) -> etree._Element:
    bottom = axis.orient == "bottom"
    group = etree.SubElement(
        parent,
        "g",
        {
            "class": css_class,
            "id": axis_id,
            "fill": "none",
            "font-size": "10",
            "font-family": "sans-serif",
            "text-anchor": "middle" if bottom else "end",
        },
    )

    if bottom:
        domain_path = f"M0.5,{TICK_SIZE}V0.5H{_num(length + 0.5)}V{TICK_SIZE}"
    else:
        domain_path = f"M-{TICK_SIZE},0.5H0.5V{_num(length + 0.5)}H-{TICK_SIZE}"
    etree.SubElement(group, "path", {"class": "domain", "stroke": "currentColor", "d": domain_path})

    for position, label in axis.ticks():
        if bottom:
            tick = etree.SubElement(group, "g", {"class": "tick", "opacity": "1", "transform": f"translate({_num(position)},0)"})
            etree.SubElement(tick, "line", {"stroke": "currentColor", "y2": str(TICK_SIZE)})
            _text(tick, label, {"fill": "currentColor", "y": str(TICK_SIZE + 3), "dy": "0.71em"})
        else:
            tick = etree.SubElement(group, "g", {"class": "tick", "opacity": "1", "transform": f"translate(0,{_num(position)})"})
            etree.SubElement(tick, "line", {"stroke": "currentColor", "x2": f"-{TICK_SIZE}"})
            _text(tick, label, {"fill": "currentColor", "x": f"-{TICK_SIZE + 3}", "dy": "0.32em"})
    return group


def _draw_legend(parent: etree._Element, scales: ChartScales, *, width: float, height: float) -> None:
    legend = etree.SubElement(parent, "g", {"id": "legend"})
    for i, key in enumerate(scales.color.domain):
        entry = etree.SubElement(
            legend,
            "g",
            {"class": "legend-label", "transform": f"translate(0,{_num(height / 2 - i * LEGEND_SPACING)})"},
        )
        etree.SubElement(
            entry,
            "rect",
            {
                "x": _num(width - LEGEND_SWATCH),
                "width": str(LEGEND_SWATCH),
                "height": str(LEGEND_SWATCH),
                "style": f"fill: {scales.color(key)}",
            },
        )
        _text(
            entry,
            LEGEND_LABELS[bool(key)],
            {"x": _num(width - 24), "y": "9", "dy": ".35em", "style": "text-anchor: end"},
        )


def _text(parent: etree._Element, text: str, attrs: dict[str, str], *, tag: str = "text") -> etree._Element:
    el = etree.SubElement(parent, tag, attrs)
    el.text = text
    return el


def _num(value: float) -> str:
    return f"{round(float(value), 3):g}"
