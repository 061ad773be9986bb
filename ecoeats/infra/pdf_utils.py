import io
from reportlab.lib.pagesizes import A4
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet


def generate_donation_report_pdf(user, donations):
    """Generate a PDF table: Date / NGO / Items / EcoPoints for the user's donation log."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=A4,
        rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20
    )

    styles = getSampleStyleSheet()
    total_items = sum(d.item_count for d in donations)
    total_points = sum(d.points_earned for d in donations)
    elements = [
        Paragraph(f"EcoEats Donation Report – {user.name}", styles["Title"]),
        Paragraph(f"{len(donations)} donations, {total_items} items, {total_points} EcoPoints earned",
                  styles["Normal"]),
        Spacer(1, 16),
    ]

    data = [["Date", "NGO", "Items", "EcoPoints"]]
    for d in sorted(donations, key=lambda d: d.date_donated):
        data.append([d.date_donated[:10], d.ngo_name, str(d.item_count), str(d.points_earned)])

    table = Table(data, repeatRows=1)
    table.setStyle(TableStyle([
        ("BACKGROUND", (0,0), (-1,0), colors.HexColor("#10B981")),
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
