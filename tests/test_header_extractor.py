from extractors.bank_formats import BankFormat
from extractors.header_extractor import extract_header
from extractors.segmenter import normalize_text


def test_kbank_header(kbank_text):
    header = extract_header(normalize_text(kbank_text), BankFormat.KBANK)

    assert header.bank_code == "kbank"
    assert "กสิกรไทย" in header.bank_name
    assert header.account_owner == "นาย สมชาย ใจดี"
    assert header.account_number == "123-4-56789-0"
    assert header.branch == "สาขาเซ็นทรัลพระราม 9"
    assert header.address == "123 ถนนสุขุมวิท กรุงเทพฯ 10110"
    assert header.period == "01/07/2025 - 31/07/2025"


def test_ktb_bilingual_header(ktb_text):
    header = extract_header(normalize_text(ktb_text), BankFormat.KTB)

    assert header.bank_code == "ktb"
    assert header.account_owner == "นางสาว สมหญิง รักดี"
    assert header.account_number == "987-6-54321-0"
    assert header.branch == "สาขาสีลม"
    assert header.address == "99 ถนนสีลม บางรัก กรุงเทพฯ 10500"
    assert header.period == "01/07/68 - 31/07/68"


def test_ktb_english_labels():
    text = "Krungthai Bank Account Name MR SOMCHAI JAIDEE Account No. 987-6-54321-0"
    header = extract_header(text, BankFormat.KTB)
    assert header.account_owner == "MR SOMCHAI JAIDEE"
    assert header.account_number == "987-6-54321-0"


def test_ktb_masked_account_number():
    header = extract_header("เลขที่บัญชี: XXX-X-X4321-X", BankFormat.KTB)
    assert header.account_number == "XXX-X-X4321-X"


def test_missing_fields_are_absent_not_errors():
    header = extract_header("01/07/68 ATM 500.00 1,000.00", BankFormat.KTB)

    assert header.bank_name
    assert header.account_owner is None
    assert header.account_number is None
    assert header.branch is None
    assert header.address is None
    assert header.period is None
    assert header.to_dict()["account_number"] is None
