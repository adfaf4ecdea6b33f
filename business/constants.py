# Функциональные модули
INCOMING_INVOICE_FUNCTION = 'BAPI_INCOMINGINVOICE_CREATE'
ACC_DOCUMENT_FUNCTION = 'BAPI_ACC_DOCUMENT_POST'
COMMIT_FUNCTION = 'BAPI_TRANSACTION_COMMIT'
READ_TABLE_FUNCTION = 'RFC_READ_TABLE'

# Данные дебиторов по балансовым единицам
CUSTOMER_TABLE = 'KNB1'
CUSTOMER_FIELD = 'KUNNR'
COMPANY_CODE_FIELD = 'BUKRS'

# Разделитель полей RFC_READ_TABLE
TABLE_DELIMITER = '|'
