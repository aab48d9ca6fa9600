"""
Shared fixtures: statement texts for both layouts and a PDF builder.
"""

import fitz  # PyMuPDF
import pytest


KBANK_TEXT = """
KASIKORNBANK ธนาคารกสิกรไทย
ชื่อบัญชี นาย สมชาย ใจดี ที่อยู่ 123 ถนนสุขุมวิท กรุงเทพฯ 10110
รอบระหว่างวันที่ 01/07/2025 - 31/07/2025 เลขที่บัญชี 123-4-56789-0
สาขา สาขาเซ็นทรัลพระราม 9 ยอดยกมา 1,271.41
01-07-25 08:53 K PLUS 1,255.41 ชำระเงิน 16.00
01-07-25 12:10 K PLUS 6,255.41 รับโอนเงิน จาก นาย ก 5,000.00
02-07-25 09:00 EDC/K SHOP/MYQR 6,155.41 ชำระเงินผ่าน QR 100.00
"""

KTB_TEXT = """
ธนาคารกรุงไทย Krungthai Bank
ชื่อบัญชี / Account Name นางสาว สมหญิง รักดี
เลขที่บัญชี / Account No. 987-6-54321-0
สาขา / Branch สาขาสีลม
ที่อยู่ / Address 99 ถนนสีลม บางรัก กรุงเทพฯ 10500
รอบบัญชี / Statement Period 01/07/68 - 31/07/68
วันที่ รายการ จำนวนเงิน ยอดคงเหลือ
30/06/68 ยอดยกมา 1,500.00
01/07/68 10:15 ถอนเงิน ATM 500.00 1,000.00
02/07/68 09:30 โอนเงินเข้า 500.00 1,500.00
03/07/68 14:22 ชำระค่าสินค้า 200.00 1,300.00
"""

# Built-in PDF fonts cannot render Thai, so PDF fixtures use English text.
KTB_PDF_LINES = [
    "Krungthai Bank",
    "Account Name MR SOMCHAI JAIDEE Account No. 987-6-54321-0",
    "01/07/68 10:15 ATM WITHDRAWAL 500.00 1,000.00",
    "02/07/68 09:30 TRANSFER IN 500.00 1,500.00",
    "03/07/68 14:22 PAYMENT 200.00 1,300.00",
]


def build_pdf(path, pages, user_pw=None):
    """Write a PDF with one list of text lines per page, optionally encrypted."""
    doc = fitz.open()
    for lines in pages:
        page = doc.new_page()
        for idx, line in enumerate(lines):
            page.insert_text((72, 72 + idx * 20), line, fontsize=11)

    if user_pw:
        doc.save(
            str(path),
            encryption=fitz.PDF_ENCRYPT_AES_256,
            user_pw=user_pw,
            owner_pw=user_pw + "-owner",
        )
    else:
        doc.save(str(path))
    doc.close()
    return path


@pytest.fixture
def kbank_text():
    return KBANK_TEXT


@pytest.fixture
def ktb_text():
    return KTB_TEXT


@pytest.fixture
def ktb_pdf(tmp_path):
    return build_pdf(tmp_path / "ktb_statement.pdf", [KTB_PDF_LINES])


@pytest.fixture
def encrypted_pdf(tmp_path):
    return build_pdf(tmp_path / "locked_statement.pdf", [KTB_PDF_LINES], user_pw="01011990")
