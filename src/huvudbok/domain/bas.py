"""Common BAS kontoplan accounts used to seed a new chart."""

# (account number, name, VAT rate in percent or None)
BAS_ACCOUNTS: tuple[tuple[str, str, int | None], ...] = (
    # 1xxx Tillgångar
    ("1010", "Balanserade utgifter för utvecklingsarbeten", None),
    ("1070", "Goodwill", None),
    ("1110", "Byggnader", None),
    ("1130", "Mark", None),
    ("1210", "Maskiner och andra tekniska anläggningar", None),
    ("1220", "Inventarier och verktyg", None),
    ("1229", "Ackumulerade avskrivningar på inventarier och verktyg", None),
    ("1240", "Bilar och andra transportmedel", None),
    ("1250", "Datorer", None),
    ("1350", "Andelar i andra företag", None),
    ("1380", "Andra långfristiga fordringar", None),
    ("1410", "Lager av råvaror", None),
    ("1460", "Lager av handelsvaror", None),
    ("1510", "Kundfordringar", None),
    ("1610", "Kortfristiga fordringar hos anställda", None),
    ("1630", "Avräkning för skatter och avgifter (skattekonto)", None),
    ("1650", "Momsfordran", None),
    ("1710", "Förutbetalda hyreskostnader", None),
    ("1790", "Övriga förutbetalda kostnader och upplupna intäkter", None),
    ("1910", "Kassa", None),
    ("1920", "PlusGiro", None),
    ("1930", "Företagskonto", None),
    ("1940", "Övriga bankkonton", None),
    # 2xxx Eget kapital och skulder
    ("2010", "Eget kapital", None),
    ("2013", "Övriga egna uttag", None),
    ("2018", "Övriga egna insättningar", None),
    ("2081", "Aktiekapital", None),
    ("2091", "Balanserad vinst eller förlust", None),
    ("2098", "Vinst eller förlust från föregående år", None),
    ("2099", "Årets resultat", None),
    ("2110", "Periodiseringsfonder", None),
    ("2150", "Ackumulerade överavskrivningar", None),
    ("2350", "Andra långfristiga skulder till kreditinstitut", None),
    ("2390", "Övriga långfristiga skulder", None),
    ("2440", "Leverantörsskulder", None),
    ("2510", "Skatteskulder", None),
    ("2610", "Utgående moms, 25%", 25),
    ("2620", "Utgående moms, 12%", 12),
    ("2630", "Utgående moms, 6%", 6),
    ("2640", "Ingående moms", None),
    ("2650", "Redovisningskonto för moms", None),
    ("2710", "Personalskatt", None),
    ("2730", "Lagstadgade sociala avgifter och särskild löneskatt", None),
    ("2820", "Kortfristiga skulder till anställda", None),
    ("2893", "Skulder till närstående personer, kortfristig del", None),
    ("2920", "Upplupna semesterlöner", None),
    ("2990", "Övriga upplupna kostnader och förutbetalda intäkter", None),
    # 3xxx Rörelsens inkomster och intäkter
    ("3001", "Försäljning inom Sverige, 25% moms", 25),
    ("3002", "Försäljning inom Sverige, 12% moms", 12),
    ("3003", "Försäljning inom Sverige, 6% moms", 6),
    ("3004", "Försäljning inom Sverige, momsfri", 0),
    ("3010", "Försäljning tjänster, 25% moms", 25),
    ("3105", "Försäljning varor till land utanför EU", 0),
    ("3106", "Försäljning varor till annat EU-land", 0),
    ("3740", "Öres- och kronutjämning", None),
    ("3960", "Valutakursvinster på fordringar och skulder av rörelsekaraktär", None),
    ("3990", "Övriga ersättningar och intäkter", None),
    # 4xxx Utgifter/kostnader för varor, material och vissa köpta tjänster
    ("4010", "Inköp material och varor", 25),
    ("4531", "Import tjänster från land utanför EU", None),
    ("4600", "Legoarbeten och underentreprenader", 25),
    # 5xxx-6xxx Övriga externa rörelseutgifter/kostnader
    ("5010", "Lokalhyra", 25),
    ("5410", "Förbrukningsinventarier", 25),
    ("5420", "Programvaror", 25),
    ("5460", "Förbrukningsmaterial", 25),
    ("5611", "Drivmedel för personbilar", 25),
    ("5800", "Resekostnader", 6),
    ("5910", "Annonsering", 25),
    ("6071", "Representation, avdragsgill", 25),
    ("6110", "Kontorsmateriel", 25),
    ("6212", "Mobiltelefon", 25),
    ("6230", "Datakommunikation", 25),
    ("6530", "Redovisningstjänster", 25),
    ("6570", "Bankkostnader", None),
    ("6991", "Övriga externa kostnader, avdragsgilla", 25),
    # 7xxx Utgifter/kostnader för personal, avskrivningar m.m.
    ("7010", "Löner till kollektivanställda", None),
    ("7210", "Löner till tjänstemän", None),
    ("7510", "Arbetsgivaravgifter", None),
    ("7533", "Särskild löneskatt för pensionskostnader", None),
    ("7690", "Övriga personalkostnader", None),
    ("7832", "Avskrivningar på inventarier och verktyg", None),
    ("7960", "Valutakursförluster på fordringar och skulder av rörelsekaraktär", None),
    # 8xxx Finansiella och andra inkomster/intäkter och utgifter/kostnader
    ("8310", "Ränteintäkter från omsättningstillgångar", None),
    ("8410", "Räntekostnader för långfristiga skulder", None),
    ("8423", "Räntekostnader för skatter och avgifter", None),
    ("8811", "Avsättning till periodiseringsfond", None),
    ("8910", "Skatt som belastar årets resultat", None),
    ("8999", "Årets resultat", None),
)
