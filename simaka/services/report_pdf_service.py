"""Servis pembuatan laporan PDF dengan reportlab."""
from datetime import datetime, timedelta, timezone
from io import BytesIO

from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import (
    KeepTogether,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from simaka.core.config import settings
from simaka.schemas.report import (
    AttendanceStats,
    ClassReportData,
    PerformanceReport,
    PromotionReport,
    ReportPayload,
    StudentReportRow,
    SummaryReport,
)
from simaka.services.report_service import PROMOTION_LABELS, REPORT_TITLES, STATUS_LABELS

# ── Warna institusi ──────────────────────────────────────────────────
NAVY = colors.HexColor("#1B2A4A")
GRAY = colors.HexColor("#6B7280")
GRAY_LIGHT = colors.HexColor("#F3F4F6")

# ── Margin halaman ───────────────────────────────────────────────────
_LEFT_MARGIN = 0.75 * inch
_RIGHT_MARGIN = 0.75 * inch
_BOTTOM_MARGIN = 0.5 * inch
# topMargin besar untuk memberi ruang header yang digambar di canvas
_TOP_MARGIN = 1.5 * inch


def _local_tz() -> timezone:
    return timezone(timedelta(hours=settings.timezone_offset_hours))


# ── Canvas: header di setiap halaman ─────────────────────────────────

def _make_page_callback(report_title: str):
    """Mengembalikan fungsi yang menggambar header institusi di setiap halaman."""

    def _draw_page(canvas, doc):
        canvas.saveState()

        page_width, page_height = letter
        left_x = _LEFT_MARGIN
        right_x = page_width - _RIGHT_MARGIN
        top_y = page_height - 0.5 * inch

        canvas.setFont("Helvetica-Bold", 10)
        canvas.setFillColor(NAVY)
        canvas.drawString(left_x, top_y, settings.school_name.upper())
        canvas.setFont("Helvetica", 8)
        canvas.drawRightString(right_x, top_y, "SIMAKA - Sistem Informasi Manajemen Kehadiran")

        sep_y = top_y - 10
        canvas.setStrokeColor(NAVY)
        canvas.setLineWidth(1.5)
        canvas.line(left_x, sep_y, right_x, sep_y)

        canvas.setFont("Helvetica-Bold", 15)
        canvas.drawCentredString(page_width / 2, sep_y - 24, report_title)

        canvas.setFont("Helvetica", 7)
        canvas.setFillColor(GRAY)
        canvas.drawRightString(right_x, 0.3 * inch, f"Halaman {doc.page}")

        canvas.restoreState()

    return _draw_page


def _header(subtitle: str = "") -> list:
    """Subjudul dan tanggal cetak sebagai flowable."""
    styles = getSampleStyleSheet()
    elements = []

    if subtitle:
        elements.append(Paragraph(subtitle, ParagraphStyle(
            "ReportSubtitle",
            parent=styles["Normal"],
            fontSize=10,
            leading=14,
            textColor=GRAY,
            spaceAfter=6,
        )))

    offset = settings.timezone_offset_hours
    printed = datetime.now(_local_tz()).strftime(f"%d/%m/%Y %H:%M GMT{offset:+d}")
    elements.append(Paragraph(f"Dicetak: {printed}", ParagraphStyle(
        "ReportMeta",
        parent=styles["Normal"],
        fontSize=9,
        leading=14,
        textColor=GRAY,
        spaceAfter=3,
    )))
    elements.append(Spacer(1, 0.25 * inch))
    return elements


# ── Helper tabel dan seksi ───────────────────────────────────────────

def _table(headers: list[str], rows: list[list], col_widths=None) -> Table:
    """Tabel bergaya institusi dengan baris berselang-seling."""
    data = [headers] + rows
    table = Table(data, colWidths=col_widths, repeatRows=1)
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), NAVY),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, 0), 9),
        ("BOTTOMPADDING", (0, 0), (-1, 0), 8),
        ("TOPPADDING", (0, 0), (-1, 0), 8),
        ("FONTNAME", (0, 1), (-1, -1), "Helvetica"),
        ("FONTSIZE", (0, 1), (-1, -1), 8),
        ("BOTTOMPADDING", (0, 1), (-1, -1), 6),
        ("TOPPADDING", (0, 1), (-1, -1), 6),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#D1D5DB")),
        *[
            ("BACKGROUND", (0, i), (-1, i), GRAY_LIGHT)
            for i in range(2, len(data), 2)
        ],
        ("ALIGN", (0, 0), (-1, -1), "LEFT"),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
    ]))
    return table


def _section_title(text: str) -> Paragraph:
    return Paragraph(text, ParagraphStyle(
        "SectionTitle",
        fontSize=12,
        textColor=NAVY,
        fontName="Helvetica-Bold",
        spaceBefore=6,
        spaceAfter=10,
    ))


def _empty_note(text: str) -> Paragraph:
    return Paragraph(text, getSampleStyleSheet()["Normal"])


def _new_doc(buf: BytesIO) -> SimpleDocTemplate:
    return SimpleDocTemplate(
        buf,
        pagesize=letter,
        topMargin=_TOP_MARGIN,
        bottomMargin=_BOTTOM_MARGIN,
        leftMargin=_LEFT_MARGIN,
        rightMargin=_RIGHT_MARGIN,
    )


# ── Seksi yang dipakai beberapa jenis laporan ────────────────────────

def _stats_section(stats: AttendanceStats) -> KeepTogether:
    rows = [
        ["Total Siswa", str(stats.total_students)],
        ["Hadir", str(stats.present)],
        ["Terlambat", str(stats.late)],
        ["Tidak Hadir", str(stats.absent)],
        ["Izin / Sakit", str(stats.permission)],
        ["Tingkat Kehadiran", f"{stats.attendance_rate}%"],
    ]
    return KeepTogether([
        _section_title("Statistik Kehadiran Hari Ini"),
        _table(["Indikator", "Nilai"], rows, col_widths=[3.5 * inch, 2.5 * inch]),
    ])


def _student_rows_section(title: str, rows: list[StudentReportRow], with_promotion: bool) -> list:
    if not rows:
        return [_section_title(title), _empty_note("Belum ada data siswa.")]
    if with_promotion:
        headers = ["NIS", "Nama", "Kelas", "Kehadiran", "Status Kenaikan", "Kelas Tujuan"]
        data = [
            [r.nis, r.name, r.class_name, f"{r.attendance}%",
             PROMOTION_LABELS[r.promotion_status], r.next_class]
            for r in rows
        ]
        widths = [0.9 * inch, 2 * inch, 0.9 * inch, 0.8 * inch, 1.3 * inch, 1 * inch]
    else:
        headers = ["NIS", "Nama", "Kelas", "H", "T", "A", "I/S", "Hari", "Kehadiran", "Status", "Jam"]
        data = [
            [r.nis, r.name, r.class_name, str(r.present), str(r.late), str(r.absent),
             str(r.permission), str(r.total_attendance_days), f"{r.attendance}%",
             STATUS_LABELS[r.current_status], r.current_time]
            for r in rows
        ]
        widths = [0.75 * inch, 1.5 * inch, 0.75 * inch] + [0.35 * inch] * 4 + [
            0.4 * inch, 0.65 * inch, 0.8 * inch, 0.45 * inch,
        ]
    return [_section_title(title), _table(headers, data, col_widths=widths)]


# ═════════════════════════════════════════════════════════════════════
# Pembuat PDF per jenis laporan
# ═════════════════════════════════════════════════════════════════════

def _summary_elements(report: SummaryReport) -> list:
    cat = report.student_categories
    promo = report.promotion_stats
    return [
        _stats_section(report.attendance_stats),
        Spacer(1, 0.25 * inch),
        KeepTogether([
            _section_title("Kategori Siswa"),
            _table(["Kategori", "Jumlah"], [
                ["Siswa Baru", str(cat.new_students)],
                ["Siswa Pindahan", str(cat.transfer_students)],
                ["Siswa Lama", str(cat.existing_students)],
                ["Total", str(cat.total_students)],
            ]),
        ]),
        Spacer(1, 0.25 * inch),
        KeepTogether([
            _section_title("Status Kenaikan Kelas"),
            _table(["Status", "Jumlah"], [
                ["Naik Kelas", str(promo.promoted)],
                ["Tinggal Kelas", str(promo.retained)],
                ["Lulus", str(promo.graduated)],
                ["Belum Ditetapkan", str(promo.undecided)],
            ]),
        ]),
    ]


def _performance_elements(report: PerformanceReport) -> list:
    perf = report.performance_data
    elements = [
        _stats_section(report.attendance_stats),
        Spacer(1, 0.25 * inch),
        KeepTogether([
            _section_title("Sebaran Persentase Kehadiran"),
            _table(["Rentang", "Jumlah Siswa"], [
                ["100%", str(perf.perfect_attendance)],
                ["90% - 99%", str(perf.high_attendance)],
                ["75% - 89%", str(perf.medium_attendance)],
                ["< 75%", str(perf.low_attendance)],
            ]),
        ]),
        Spacer(1, 0.25 * inch),
    ]
    for title, students, counter in (
        ("Paling Sering Terlambat", perf.most_late, "late"),
        ("Paling Sering Tidak Hadir", perf.most_absent, "absent"),
    ):
        if students:
            rows = [[s.nis, s.name, s.class_name, str(getattr(s, counter))] for s in students]
            elements.append(KeepTogether([
                _section_title(title),
                _table(["NIS", "Nama", "Kelas", "Jumlah"], rows),
            ]))
            elements.append(Spacer(1, 0.2 * inch))
    return elements


def _class_elements(report: ClassReportData) -> list:
    if not report.class_reports:
        return [_section_title("Rekap per Kelas"), _empty_note("Belum ada data kelas.")]
    rows = [
        [c.class_name, str(c.total_students), str(c.present), str(c.late), str(c.absent),
         str(c.permission), f"{c.average_attendance}%", str(c.promoted), str(c.retained),
         str(c.graduated)]
        for c in report.class_reports
    ]
    return [
        _stats_section(report.attendance_stats),
        Spacer(1, 0.25 * inch),
        _section_title("Rekap per Kelas"),
        _table(
            ["Kelas", "Siswa", "H", "T", "A", "I/S", "Rata-rata", "Naik", "Tinggal", "Lulus"],
            rows,
        ),
    ]


def _promotion_elements(report: PromotionReport) -> list:
    promo = report.promotion_stats
    return [
        KeepTogether([
            _section_title("Ringkasan Kenaikan Kelas"),
            _table(["Status", "Jumlah"], [
                ["Total Siswa", str(promo.total)],
                ["Naik Kelas", str(promo.promoted)],
                ["Tinggal Kelas", str(promo.retained)],
                ["Lulus", str(promo.graduated)],
                ["Belum Ditetapkan", str(promo.undecided)],
            ], col_widths=[3.5 * inch, 2.5 * inch]),
        ]),
        Spacer(1, 0.25 * inch),
        *_student_rows_section("Detail per Siswa", report.detailed_stats, with_promotion=True),
    ]


def generate_report_pdf(report: ReportPayload) -> bytes:
    """Merender payload laporan apa pun menjadi dokumen PDF."""
    title = REPORT_TITLES[report.report_type]
    buf = BytesIO()
    doc = _new_doc(buf)
    page_cb = _make_page_callback(title)
    elements = _header(f"{settings.school_name} - jenis laporan: {report.report_type.value}")

    if isinstance(report, SummaryReport):
        elements += _summary_elements(report)
    elif isinstance(report, PerformanceReport):
        elements += _performance_elements(report)
    elif isinstance(report, ClassReportData):
        elements += _class_elements(report)
    elif isinstance(report, PromotionReport):
        elements += _promotion_elements(report)
    else:
        # Laporan detail dan presensi berbagi tabel per siswa
        elements += [_stats_section(report.attendance_stats), Spacer(1, 0.25 * inch)]
        elements += _student_rows_section("Data Kehadiran Siswa", report.students, with_promotion=False)

    doc.build(elements, onFirstPage=page_cb, onLaterPages=page_cb)
    return buf.getvalue()
