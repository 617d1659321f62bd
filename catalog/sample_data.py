"""Default games and the sample storefront used by ``seed_catalog``."""

DEFAULT_GAMES = [
    {"slug": "valorant", "name": "Valorant", "verification": "discord", "display_order": 1},
    {"slug": "minecraft", "name": "Minecraft", "verification": "credentials", "display_order": 2},
    {"slug": "csgo", "name": "CS:GO", "verification": "none", "display_order": 3},
    {"slug": "fortnite", "name": "Fortnite", "verification": "credentials", "display_order": 4},
    {"slug": "pubg", "name": "PUBG", "verification": "none", "display_order": 5},
    {"slug": "other", "name": "Other", "verification": "none", "display_order": 6},
]

SAMPLE_ACCOUNTS = [
    # Valorant
    {
        "game": "valorant",
        "title": "Radiant Account - Prime Collection",
        "price": "299",
        "featured": True,
        "bundle": "Prime 2.0 Bundle",
        "skins": [
            ("Prime Vandal", "legendary"),
            ("Prime Phantom", "legendary"),
            ("Prime Spectre", "legendary"),
            ("Reaver Operator", "epic"),
            ("Dragon Knife", "legendary"),
        ],
    },
    {
        "game": "valorant",
        "title": "Immortal Smurf - Glitchpop",
        "price": "189",
        "bundle": "Glitchpop Bundle",
        "skins": [
            ("Glitchpop Vandal", "epic"),
            ("Glitchpop Phantom", "epic"),
            ("Ion Sheriff", "epic"),
        ],
    },
    {
        "game": "valorant",
        "title": "Diamond Account - Elderflame",
        "price": "125",
        "bundle": "Elderflame Collection",
        "skins": [
            ("Elderflame Vandal", "legendary"),
            ("Elderflame Knife", "legendary"),
        ],
    },
    # Minecraft
    {
        "game": "minecraft",
        "title": "Premium Java + Bedrock",
        "price": "45",
        "featured": True,
        "bundle": "Minecon Cape Collection",
        "skins": [
            ("Minecon 2016 Cape", "legendary"),
            ("Pancape", "rare"),
            ("Translator Cape", "epic"),
            ("Cobalt Skin", "rare"),
        ],
    },
    {
        "game": "minecraft",
        "title": "OG Account - 2010 Join Date",
        "price": "89",
        "bundle": "Vintage Collection",
        "skins": [
            ("Alpha Tester Cape", "legendary"),
            ("Classic Steve", "common"),
        ],
    },
    {
        "game": "minecraft",
        "title": "Hypixel VIP++ Account",
        "price": "65",
        "bundle": "Hypixel Exclusive",
        "skins": [
            ("VIP Skin", "epic"),
            ("MVP++ Cosmetics", "rare"),
            ("Network Level Cape", "rare"),
        ],
    },
    # CS:GO
    {
        "game": "csgo",
        "title": "Global Elite - Dragon Lore",
        "price": "450",
        "featured": True,
        "bundle": "Dragon Collection",
        "skins": [
            ("AWP Dragon Lore", "legendary"),
            ("AK-47 Fire Serpent", "legendary"),
            ("M4A4 Howl", "legendary"),
            ("Karambit Fade", "legendary"),
        ],
    },
    {
        "game": "csgo",
        "title": "Supreme Master - Asiimov Set",
        "price": "180",
        "bundle": "Asiimov Collection",
        "skins": [
            ("AWP Asiimov", "epic"),
            ("M4A4 Asiimov", "epic"),
            ("P250 Asiimov", "rare"),
        ],
    },
    {
        "game": "csgo",
        "title": "Legendary Eagle - Knife Collection",
        "price": "220",
        "bundle": "Knife Paradise",
        "skins": [
            ("Butterfly Knife Doppler", "legendary"),
            ("AK-47 Redline", "rare"),
            ("USP-S Kill Confirmed", "epic"),
        ],
    },
]
