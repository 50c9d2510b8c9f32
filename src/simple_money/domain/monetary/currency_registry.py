from simple_money.domain.monetary.currency import Currency, CurrencyRegistry


# Major currencies
USD = Currency(1, "USD", "United States Dollar", "$", "Cent", 100, 2, True, "$", ".", ",")
EUR = Currency(2, "EUR", "Euro", "€", "Cent", 100, 2, True, "&#x20AC;", ",", ".")
GBP = Currency(3, "GBP", "British Pound", "£", "Penny", 100, 2, True, "&#x00A3;", ".", ",")
AUD = Currency(4, "AUD", "Australian Dollar", "$", "Cent", 100, 2, True, "$", ".", ",")
CAD = Currency(5, "CAD", "Canadian Dollar", "$", "Cent", 100, 2, True, "$", ".", ",")
JPY = Currency(6, "JPY", "Japanese Yen", "¥", "Sen", 1, 0, True, "&#x00A5;", ".", ",")

# Other currencies with 100 subunits
CHF = Currency(100, "CHF", "Swiss Franc", "Fr", "Rappen", 100, 2, True, "", ".", ",")
CNY = Currency(100, "CNY", "Chinese Renminbi Yuan", "¥", "Fen", 100, 2, True, "&#x5713;", ".", ",")
HUF = Currency(100, "HUF", "Hungarian Forint", "Ft", "Fillér", 100, 2, False, "", ",", ".")
SEK = Currency(100, "SEK", "Swedish Krona", "kr", "Öre", 100, 2, False, "", ",", " ")

# Whole-unit currencies (no subunits)
KRW = Currency(100, "KRW", "South Korean Won", "₩", "Jeon", 1, 0, True, "&#x20A9;", ".", ",")
CLP = Currency(100, "CLP", "Chilean Peso", "$", "Peso", 1, 0, True, "&#36;", ",", ".")
ISK = Currency(100, "ISK", "Icelandic Króna", "kr", "Eyrir", 1, 0, True, "", ",", ".")

# Non-decimal and unusual subunit ratios
VND = Currency(100, "VND", "Vietnamese Đồng", "₫", "Hào", 10, 1, True, "&#x20AB;", ",", ".")
MGA = Currency(100, "MGA", "Malagasy Ariary", "Ar", "Iraimbilanja", 5, 1, True, "", ".", ",")
MRO = Currency(100, "MRO", "Mauritanian Ouguiya", "UM", "Khoums", 5, 1, False, "", ".", ",")

# Currencies with 1000 subunits
BHD = Currency(100, "BHD", "Bahraini Dinar", "ب.د", "Fils", 1000, 3, True, "", ".", ",")
JOD = Currency(100, "JOD", "Jordanian Dinar", "د.ا", "Fils", 1000, 3, True, "", ".", ",")
KWD = Currency(100, "KWD", "Kuwaiti Dinar", "د.ك", "Fils", 1000, 3, True, "", ".", ",")
OMR = Currency(100, "OMR", "Omani Rial", "ر.ع.", "Baisa", 1000, 3, True, "&#xFDFC;", ".", ",")
TND = Currency(100, "TND", "Tunisian Dinar", "د.ت", "Millime", 1000, 3, False, "", ".", ",")

# Register all predefined currencies
CURRENCIES = CurrencyRegistry(
    [
        USD, EUR, GBP, AUD, CAD, JPY,
        CHF, CNY, HUF, SEK,
        KRW, CLP, ISK,
        VND, MGA, MRO,
        BHD, JOD, KWD, OMR, TND,
    ]
)
