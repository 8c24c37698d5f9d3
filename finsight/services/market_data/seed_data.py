# finsight/services/market_data/seed_data.py
"""
Initial stock catalog used by the simulator.

Quote fields are starting values only; the price updater rewrites them on
every run.
"""

from decimal import Decimal

SEED_STOCKS: list[dict] = [
    {
        "symbol": "AAPL",
        "name": "Apple Inc.",
        "sector": "Technology",
        "industry": "Consumer Electronics",
        "description": "Designs, manufactures, and markets smartphones, personal computers, tablets, wearables, and accessories.",
        "current_price": Decimal("178.50"),
        "previous_close": Decimal("177.25"),
        "day_high": Decimal("180.00"),
        "day_low": Decimal("176.50"),
        "volume": 65_000_000,
        "market_cap": 2_800_000_000_000,
        "pe_ratio": Decimal("29.5"),
        "dividend_yield": Decimal("0.52"),
        "fifty_two_week_high": Decimal("198.23"),
        "fifty_two_week_low": Decimal("164.08"),
    },
    {
        "symbol": "MSFT",
        "name": "Microsoft Corporation",
        "sector": "Technology",
        "industry": "Software",
        "description": "Develops and licenses software, cloud services, devices, and solutions.",
        "current_price": Decimal("378.25"),
        "previous_close": Decimal("375.50"),
        "day_high": Decimal("380.00"),
        "day_low": Decimal("374.00"),
        "volume": 28_000_000,
        "market_cap": 2_810_000_000_000,
        "pe_ratio": Decimal("34.2"),
        "dividend_yield": Decimal("0.78"),
        "fifty_two_week_high": Decimal("384.30"),
        "fifty_two_week_low": Decimal("309.45"),
    },
    {
        "symbol": "GOOGL",
        "name": "Alphabet Inc.",
        "sector": "Technology",
        "industry": "Internet Services",
        "description": "Provides online advertising, search, cloud computing, and other internet services.",
        "current_price": Decimal("141.80"),
        "previous_close": Decimal("140.25"),
        "day_high": Decimal("143.50"),
        "day_low": Decimal("139.80"),
        "volume": 32_000_000,
        "market_cap": 1_780_000_000_000,
        "pe_ratio": Decimal("26.8"),
        "dividend_yield": Decimal("0"),
        "fifty_two_week_high": Decimal("152.05"),
        "fifty_two_week_low": Decimal("120.21"),
    },
    {
        "symbol": "AMZN",
        "name": "Amazon.com Inc.",
        "sector": "Consumer Cyclical",
        "industry": "Internet Retail",
        "description": "Operates online retail marketplaces and provides cloud computing services.",
        "current_price": Decimal("178.35"),
        "previous_close": Decimal("176.90"),
        "day_high": Decimal("180.25"),
        "day_low": Decimal("175.50"),
        "volume": 45_000_000,
        "market_cap": 1_850_000_000_000,
        "pe_ratio": Decimal("68.5"),
        "dividend_yield": Decimal("0"),
        "fifty_two_week_high": Decimal("188.65"),
        "fifty_two_week_low": Decimal("118.35"),
    },
    {
        "symbol": "META",
        "name": "Meta Platforms Inc.",
        "sector": "Technology",
        "industry": "Social Media",
        "description": "Builds social networking platforms and virtual reality products.",
        "current_price": Decimal("484.20"),
        "previous_close": Decimal("481.50"),
        "day_high": Decimal("488.00"),
        "day_low": Decimal("479.30"),
        "volume": 18_000_000,
        "market_cap": 1_230_000_000_000,
        "pe_ratio": Decimal("28.9"),
        "dividend_yield": Decimal("0"),
        "fifty_two_week_high": Decimal("542.81"),
        "fifty_two_week_low": Decimal("279.44"),
    },
    {
        "symbol": "TSLA",
        "name": "Tesla Inc.",
        "sector": "Consumer Cyclical",
        "industry": "Auto Manufacturers",
        "description": "Designs and manufactures electric vehicles and energy storage systems.",
        "current_price": Decimal("242.80"),
        "previous_close": Decimal("238.45"),
        "day_high": Decimal("245.60"),
        "day_low": Decimal("237.20"),
        "volume": 98_000_000,
        "market_cap": 772_000_000_000,
        "pe_ratio": Decimal("76.4"),
        "dividend_yield": Decimal("0"),
        "fifty_two_week_high": Decimal("299.29"),
        "fifty_two_week_low": Decimal("152.37"),
    },
    {
        "symbol": "NVDA",
        "name": "NVIDIA Corporation",
        "sector": "Technology",
        "industry": "Semiconductors",
        "description": "Designs graphics processors and chips for gaming, data centers, and AI.",
        "current_price": Decimal("878.25"),
        "previous_close": Decimal("865.40"),
        "day_high": Decimal("885.00"),
        "day_low": Decimal("862.30"),
        "volume": 42_000_000,
        "market_cap": 2_170_000_000_000,
        "pe_ratio": Decimal("71.3"),
        "dividend_yield": Decimal("0.03"),
        "fifty_two_week_high": Decimal("974.00"),
        "fifty_two_week_low": Decimal("394.00"),
    },
    {
        "symbol": "JPM",
        "name": "JPMorgan Chase & Co.",
        "sector": "Financial Services",
        "industry": "Banking",
        "description": "Provides investment banking, financial services, and asset management.",
        "current_price": Decimal("198.45"),
        "previous_close": Decimal("196.80"),
        "day_high": Decimal("200.20"),
        "day_low": Decimal("195.50"),
        "volume": 12_000_000,
        "market_cap": 576_000_000_000,
        "pe_ratio": Decimal("11.2"),
        "dividend_yield": Decimal("2.24"),
        "fifty_two_week_high": Decimal("208.96"),
        "fifty_two_week_low": Decimal("135.19"),
    },
    {
        "symbol": "BAC",
        "name": "Bank of America Corp.",
        "sector": "Financial Services",
        "industry": "Banking",
        "description": "Provides banking and financial products to individuals and businesses.",
        "current_price": Decimal("40.85"),
        "previous_close": Decimal("40.45"),
        "day_high": Decimal("41.20"),
        "day_low": Decimal("40.30"),
        "volume": 38_000_000,
        "market_cap": 314_000_000_000,
        "pe_ratio": Decimal("12.8"),
        "dividend_yield": Decimal("2.64"),
        "fifty_two_week_high": Decimal("42.75"),
        "fifty_two_week_low": Decimal("26.92"),
    },
    {
        "symbol": "V",
        "name": "Visa Inc.",
        "sector": "Financial Services",
        "industry": "Credit Services",
        "description": "Operates a global electronic payments network.",
        "current_price": Decimal("282.60"),
        "previous_close": Decimal("280.15"),
        "day_high": Decimal("284.50"),
        "day_low": Decimal("279.20"),
        "volume": 6_500_000,
        "market_cap": 568_000_000_000,
        "pe_ratio": Decimal("32.1"),
        "dividend_yield": Decimal("0.74"),
        "fifty_two_week_high": Decimal("290.96"),
        "fifty_two_week_low": Decimal("227.83"),
    },
    {
        "symbol": "JNJ",
        "name": "Johnson & Johnson",
        "sector": "Healthcare",
        "industry": "Drug Manufacturers",
        "description": "Develops pharmaceuticals, medical devices, and consumer health products.",
        "current_price": Decimal("156.80"),
        "previous_close": Decimal("155.40"),
        "day_high": Decimal("158.20"),
        "day_low": Decimal("154.90"),
        "volume": 8_200_000,
        "market_cap": 379_000_000_000,
        "pe_ratio": Decimal("24.7"),
        "dividend_yield": Decimal("3.05"),
        "fifty_two_week_high": Decimal("168.85"),
        "fifty_two_week_low": Decimal("143.13"),
    },
    {
        "symbol": "UNH",
        "name": "UnitedHealth Group Inc.",
        "sector": "Healthcare",
        "industry": "Healthcare Plans",
        "description": "Provides health insurance and healthcare services.",
        "current_price": Decimal("524.30"),
        "previous_close": Decimal("518.75"),
        "day_high": Decimal("528.50"),
        "day_low": Decimal("516.20"),
        "volume": 2_800_000,
        "market_cap": 484_000_000_000,
        "pe_ratio": Decimal("28.3"),
        "dividend_yield": Decimal("1.32"),
        "fifty_two_week_high": Decimal("562.00"),
        "fifty_two_week_low": Decimal("445.68"),
    },
    {
        "symbol": "PFE",
        "name": "Pfizer Inc.",
        "sector": "Healthcare",
        "industry": "Drug Manufacturers",
        "description": "Discovers, develops, and manufactures medicines and vaccines.",
        "current_price": Decimal("28.45"),
        "previous_close": Decimal("28.10"),
        "day_high": Decimal("28.85"),
        "day_low": Decimal("27.95"),
        "volume": 42_000_000,
        "market_cap": 160_000_000_000,
        "pe_ratio": Decimal("9.8"),
        "dividend_yield": Decimal("5.91"),
        "fifty_two_week_high": Decimal("33.06"),
        "fifty_two_week_low": Decimal("25.20"),
    },
    {
        "symbol": "WMT",
        "name": "Walmart Inc.",
        "sector": "Consumer Defensive",
        "industry": "Discount Stores",
        "description": "Operates retail stores, warehouse clubs, and e-commerce websites.",
        "current_price": Decimal("73.85"),
        "previous_close": Decimal("72.90"),
        "day_high": Decimal("74.50"),
        "day_low": Decimal("72.40"),
        "volume": 12_000_000,
        "market_cap": 598_000_000_000,
        "pe_ratio": Decimal("32.5"),
        "dividend_yield": Decimal("1.24"),
        "fifty_two_week_high": Decimal("75.55"),
        "fifty_two_week_low": Decimal("49.85"),
    },
    {
        "symbol": "KO",
        "name": "The Coca-Cola Company",
        "sector": "Consumer Defensive",
        "industry": "Beverages",
        "description": "Manufactures and markets nonalcoholic beverages worldwide.",
        "current_price": Decimal("62.30"),
        "previous_close": Decimal("61.85"),
        "day_high": Decimal("62.80"),
        "day_low": Decimal("61.50"),
        "volume": 16_000_000,
        "market_cap": 270_000_000_000,
        "pe_ratio": Decimal("26.4"),
        "dividend_yield": Decimal("2.89"),
        "fifty_two_week_high": Decimal("65.35"),
        "fifty_two_week_low": Decimal("51.55"),
    },
    {
        "symbol": "MCD",
        "name": "McDonald's Corporation",
        "sector": "Consumer Cyclical",
        "industry": "Restaurants",
        "description": "Operates and franchises fast-food restaurants worldwide.",
        "current_price": Decimal("294.50"),
        "previous_close": Decimal("292.80"),
        "day_high": Decimal("296.20"),
        "day_low": Decimal("291.40"),
        "volume": 2_800_000,
        "market_cap": 214_000_000_000,
        "pe_ratio": Decimal("25.1"),
        "dividend_yield": Decimal("2.17"),
        "fifty_two_week_high": Decimal("302.39"),
        "fifty_two_week_low": Decimal("245.73"),
    },
    {
        "symbol": "XOM",
        "name": "Exxon Mobil Corporation",
        "sector": "Energy",
        "industry": "Oil & Gas",
        "description": "Explores for, produces, and refines oil and natural gas.",
        "current_price": Decimal("116.75"),
        "previous_close": Decimal("115.20"),
        "day_high": Decimal("118.50"),
        "day_low": Decimal("114.80"),
        "volume": 18_000_000,
        "market_cap": 468_000_000_000,
        "pe_ratio": Decimal("13.2"),
        "dividend_yield": Decimal("3.12"),
        "fifty_two_week_high": Decimal("124.45"),
        "fifty_two_week_low": Decimal("95.77"),
    },
    {
        "symbol": "CVX",
        "name": "Chevron Corporation",
        "sector": "Energy",
        "industry": "Oil & Gas",
        "description": "Engages in integrated energy and chemicals operations.",
        "current_price": Decimal("162.40"),
        "previous_close": Decimal("160.85"),
        "day_high": Decimal("164.20"),
        "day_low": Decimal("159.50"),
        "volume": 9_500_000,
        "market_cap": 298_000_000_000,
        "pe_ratio": Decimal("14.7"),
        "dividend_yield": Decimal("3.45"),
        "fifty_two_week_high": Decimal("172.25"),
        "fifty_two_week_low": Decimal("135.37"),
    },
    {
        "symbol": "DIS",
        "name": "The Walt Disney Company",
        "sector": "Communication Services",
        "industry": "Entertainment",
        "description": "Operates media networks, theme parks, and streaming services.",
        "current_price": Decimal("113.45"),
        "previous_close": Decimal("111.80"),
        "day_high": Decimal("115.20"),
        "day_low": Decimal("110.90"),
        "volume": 12_000_000,
        "market_cap": 207_000_000_000,
        "pe_ratio": Decimal("38.6"),
        "dividend_yield": Decimal("0"),
        "fifty_two_week_high": Decimal("123.74"),
        "fifty_two_week_low": Decimal("78.73"),
    },
    {
        "symbol": "NFLX",
        "name": "Netflix Inc.",
        "sector": "Communication Services",
        "industry": "Entertainment",
        "description": "Provides subscription streaming of films and television series.",
        "current_price": Decimal("638.50"),
        "previous_close": Decimal("632.10"),
        "day_high": Decimal("645.80"),
        "day_low": Decimal("628.40"),
        "volume": 4_200_000,
        "market_cap": 274_000_000_000,
        "pe_ratio": Decimal("44.3"),
        "dividend_yield": Decimal("0"),
        "fifty_two_week_high": Decimal("697.49"),
        "fifty_two_week_low": Decimal("344.73"),
    },
]
