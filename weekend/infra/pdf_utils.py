import io
from xml.sax.saxutils import escape
from reportlab.lib.pagesizes import A4, landscape
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet

from weekend.domain.Activity import Day

DEFAULT_HEADER_COLOR = "#4CAF50"


def _header_color(plan):
    # custom theme colors are free text; fall back when not a hex value
    try:
        return colors.HexColor(plan.custom_theme_colors.primary)
    except (AttributeError, ValueError, TypeError):
        return colors.HexColor(DEFAULT_HEADER_COLOR)


def generate_pdf_for_plan(plan, theme_name: str = ""):
    """Generate a simple PDF table: Day / Start / End / Activity / Category / Mood for the provided plan."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=landscape(A4),
        rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20
    )

    styles = getSampleStyleSheet()
    elements = [Paragraph(escape(plan.name), styles["Title"])]
    if theme_name:
        elements.append(Paragraph(f"Theme: {escape(theme_name)}", styles["Heading2"]))
    elements.append(Spacer(1, 16))

    data = [["Day", "Start", "End", "Activity", "Category", "Mood"]]
    for day in Day:
        for activity in plan.activities_for(day):
            data.append([
                day.label,
                activity.start_time,
                activity.end_time,
                activity.name,
                activity.category,
                activity.mood or "-",
            ])

    table = Table(data, repeatRows=1)
    table.setStyle(TableStyle([
        ("BACKGROUND", (0,0), (-1,0), _header_color(plan)),
        ("TEXTCOLOR", (0,0), (-1,0), colors.whitesmoke),
        ("ALIGN", (0,0), (-1,-1), "CENTER"),
        ("FONTNAME", (0,0), (-1,0), "Helvetica-Bold"),
        ("FONTSIZE", (0,0), (-1,0), 12),
        ("BOTTOMPADDING", (0,0), (-1,0), 10),
        ("GRID", (0,0), (-1,-1), 0.5, colors.grey),
    ]))

    elements.append(table)
    doc.build(elements)
    return buf.getvalue()
