import io
from reportlab.lib.pagesizes import A4, landscape
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet

from weekmenu.domain.Plan import WeeklyPlan
from weekmenu.utilities.constants import DAYS_OF_WEEK


def generate_pdf_for_week(plan: WeeklyPlan, shopping_items=None):
    """Generate a PDF with a Day / Primary / Secondary table and an optional shopping list."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=landscape(A4),
        rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20
    )

    styles = getSampleStyleSheet()
    elements = [
        Paragraph("Weekly Dinner Plan", styles["Title"]),
        Spacer(1, 16),
    ]

    def _label(dish_id):
        dish = plan.catalog.get(dish_id)
        if dish is None:
            return "-"
        return f"{dish.name} *" if dish.special else dish.name

    data = [["Day", "Primary", "Secondary"]]
    for day in DAYS_OF_WEEK:
        data.append([day, _label(plan.get(day, "primary")), _label(plan.get(day, "secondary"))])

    table = Table(data, repeatRows=1)
    table.setStyle(TableStyle([
        ("BACKGROUND", (0,0), (-1,0), colors.HexColor("#4CAF50")),
        ("TEXTCOLOR", (0,0), (-1,0), colors.whitesmoke),
        ("ALIGN", (0,0), (-1,-1), "CENTER"),
        ("FONTNAME", (0,0), (-1,0), "Helvetica-Bold"),
        ("FONTSIZE", (0,0), (-1,0), 12),
        ("BOTTOMPADDING", (0,0), (-1,0), 10),
        ("GRID", (0,0), (-1,-1), 0.5, colors.grey),
    ]))
    elements.append(table)

    if shopping_items:
        elements.append(Spacer(1, 16))
        elements.append(Paragraph("Shopping list", styles["Heading2"]))
        rows = [["Ingredient", "Count"]] + [[i["name"], str(i["count"])] for i in shopping_items]
        shopping = Table(rows, repeatRows=1)
        shopping.setStyle(TableStyle([
            ("FONTNAME", (0,0), (-1,0), "Helvetica-Bold"),
            ("GRID", (0,0), (-1,-1), 0.5, colors.grey),
        ]))
        elements.append(shopping)

    doc.build(elements)
    return buf.getvalue()
