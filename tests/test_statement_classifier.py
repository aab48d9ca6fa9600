from datetime import date

from config import config
from extractors import BankFormat, Polarity, StatementClassifier, classify_statement


def test_kplus_single_expense():
    result = classify_statement("01-07-25 08:53 K PLUS 1,255.41 ชำระเงิน 16.00")

    assert result.header.bank_code == "kbank"
    assert len(result.transactions) == 1
    txn = result.transactions[0]
    assert txn.id == "1"
    assert txn.amount == 16.00
    assert txn.date == date(2025, 7, 1)
    assert txn.time == "08:53"
    assert txn.polarity == Polarity.EXPENSE
    assert "K PLUS" not in txn.description
    assert "16.00" not in txn.description
    assert "1,255.41" not in txn.description


def test_kbank_statement(kbank_text):
    result = classify_statement(kbank_text)

    assert [t.polarity for t in result.transactions] == [
        Polarity.EXPENSE, Polarity.INCOME, Polarity.EXPENSE
    ]
    assert [t.amount for t in result.transactions] == [16.00, 5000.00, 100.00]
    assert [t.id for t in result.transactions] == ["1", "2", "3"]
    assert result.header.account_number == "123-4-56789-0"
    assert result.stats["by_balance"] == 2
    assert result.stats["by_keyword"] == 1


def test_ktb_statement(ktb_text):
    result = classify_statement(ktb_text)

    assert result.bank_name.startswith("ธนาคารกรุงไทย")
    assert [(t.date, t.time, t.description, t.amount, t.type) for t in result.transactions] == [
        (date(2025, 7, 1), "10:15", "ถอนเงิน ATM", 500.00, "expense"),
        (date(2025, 7, 2), "09:30", "โอนเงินเข้า", 500.00, "income"),
        (date(2025, 7, 3), "14:22", "ชำระค่าสินค้า", 200.00, "expense"),
    ]
    assert result.stats["header_spans"] == 1
    assert result.stats["candidates"] == 3
    assert result.total_income == 500.00
    assert result.total_expense == 700.00
    assert result.net_amount == -200.00


def test_ktb_balance_step_marks_income():
    text = "กรุงไทย 01/07/68 ถอนเงิน 100.00 1,000.00 02/07/68 รายการ 500.00 1,500.00"
    result = classify_statement(text)
    assert result.transactions[1].polarity == Polarity.INCOME


def test_no_anchors_returns_empty_result_with_text():
    text = "ไม่พบรายการเดินบัญชี statement text without dates"
    result = classify_statement(text)

    assert result.is_empty
    assert result.transactions == ()
    assert result.raw_text == text
    assert result.to_dict()["raw_text"] == text


def test_forced_format_skips_detection():
    text = "01/07/68 ถอนเงิน 100.00 1,000.00"
    assert classify_statement(text, bank_format=BankFormat.KBANK).is_empty
    assert len(classify_statement(text, bank_format=BankFormat.KTB).transactions) == 1


def test_non_string_input_gives_empty_result():
    assert classify_statement(None).is_empty


def test_transaction_amounts_are_non_negative(kbank_text, ktb_text):
    for text in (kbank_text, ktb_text):
        for txn in classify_statement(text).transactions:
            assert txn.amount >= 0
            assert txn.signed_amount == (txn.amount if txn.polarity == Polarity.INCOME else -txn.amount)


def test_to_dict_shape(ktb_text):
    data = classify_statement(ktb_text).to_dict(include_raw_text=False)

    assert "raw_text" not in data
    assert data["bank_code"] == "ktb"
    assert data["transactions"][0] == {
        "id": "1",
        "date": "2025-07-01",
        "time": "10:15",
        "description": "ถอนเงิน ATM",
        "amount": 500.00,
        "type": "expense",
    }


def test_classifier_stats_reset_between_statements(kbank_text):
    classifier = StatementClassifier()
    classifier.classify(kbank_text)
    assert classifier.get_stats()["transactions_found"] == 3

    classifier.classify("nothing here")
    assert classifier.get_stats()["transactions_found"] == 0


KTB_PAGE_HEADER = """
ธนาคารกรุงไทย Krungthai Bank
ชื่อบัญชี / Account Name นางสาว สมหญิง รักดี
เลขที่บัญชี / Account No. 987-6-54321-0
รอบบัญชี / Statement Period 01/07/68 - 31/07/68
วันที่ รายการ จำนวนเงิน ยอดคงเหลือ
"""


def test_ktb_repeated_page_header_keeps_last_row_of_page():
    page_one = KTB_PAGE_HEADER + """
30/06/68 ยอดยกมา 1,500.00
01/07/68 ถอนเงิน 500.00 1,000.00
02/07/68 โอนเงินเข้า 500.00 1,500.00
"""
    page_two = KTB_PAGE_HEADER + """
03/07/68 ชำระค่าสินค้า 200.00 1,300.00
"""
    result = classify_statement(config.PAGE_SEPARATOR.join([page_one, page_two]))

    assert [(t.date, t.amount, t.type) for t in result.transactions] == [
        (date(2025, 7, 1), 500.00, "expense"),
        (date(2025, 7, 2), 500.00, "income"),
        (date(2025, 7, 3), 200.00, "expense"),
    ]
    assert result.transactions[1].description == "โอนเงินเข้า"
    assert result.stats["header_spans"] == 1
    assert result.stats["by_balance"] == 2
    assert result.header.account_number == "987-6-54321-0"
