from decimal import Decimal
from pathlib import Path

from dotenv import dotenv_values

# Корневая директория проекта
ROOT = Path(__file__).resolve().parent

# Данные .env
ENV_DATA = dotenv_values(ROOT / '.env')

# Директория для записи логов
LOGS_DIR = ROOT / '_logs'

ROBOT_NAME = 'SAP FI Postings'

# Входящий счет поставщика (BAPI_INCOMINGINVOICE_CREATE)
INCOMING_INVOICE_DEFAULTS = {
    'company_code': 'AUS',
    'currency': 'AUD',
    'doc_type': 'RE',
    'vendor': '1100688617',
    'gross_amount': Decimal('1000'),
    'gl_account': '00041000400',
    'tax_code': 'ZZ',
    'item_text': 'Non-PO expense',
    'profit_center': '100312au',
    'reference': 'INV-NONPO-0001',
}

# Пакет счетов клиентам (BAPI_ACC_DOCUMENT_POST)
CUSTOMER_INVOICE_DEFAULTS = {
    'company_code': 'AUS',
    'currency': 'AUD',
    'doc_type': 'DR',
    'gl_account': '0041000400',
    'profit_center': '100312au',
    'tax_code': 'ZZ',
    'header_text': 'Test customer invoice',
    'invoice_count': 10,
    'amounts': '100;250;500;750;1000',
    'customer_row_limit': 0,
}

# Максимальная длина внешней ссылки (REF_DOC_NO)
REFERENCE_MAX_LENGTH = 16
