"""Static display-name -> EDID tables and known slugs.

The planner speaks display names; the game data speaks EDIDs. These tables
cover the LoreRim content the application ships pages for. Anything not
listed falls through the mapper's pass-through rule.
"""

RACE_NAME_TO_EDID: dict[str, str] = {
    "Argonian": "ArgonianRace",
    "Breton": "BretonRace",
    "Dunmer": "DarkElfRace",
    "Altmer": "HighElfRace",
    "Imperial": "ImperialRace",
    "Khajiit": "KhajiitRace",
    "Nord": "NordRace",
    "Orsimer": "OrcRace",
    "Redguard": "RedguardRace",
    "Bosmer": "WoodElfRace",
}

STANDING_STONE_NAME_TO_EDID: dict[str, str] = {
    "None": "",
    "Warrior": "REQ_Ability_Birthsign_Warrior",
    "Lady": "REQ_Ability_Birthsign_Lady",
    "Lord": "REQ_Ability_Birthsign_Lord",
    "Steed": "REQ_Ability_Birthsign_Steed",
    "Mage": "REQ_Ability_Birthsign_Mage",
    "Apprentice": "REQ_Ability_Birthsign_Apprentice",
    "Atronach": "REQ_Ability_Birthsign_Atronach",
    "Ritual": "REQ_Ability_Birthsign_Ritual",
    "Thief": "REQ_Ability_Birthsign_Thief",
    "Lover": "REQ_Ability_Birthsign_Lover",
    "Shadow": "REQ_Ability_Birthsign_Shadow",
    "Tower": "REQ_Ability_Birthsign_Tower",
    "Serpent": "REQ_Ability_Birthsign_Serpent",
}

BLESSING_NAME_TO_EDID: dict[str, str] = {
    "None": "",
    "Akatosh": "REQ_Blessing_Akatosh",
    "Arkay": "REQ_Blessing_Arkay",
    "Dibella": "REQ_Blessing_Dibella",
    "Julianos": "REQ_Blessing_Julianos",
    "Kynareth": "REQ_Blessing_Kynareth",
    "Mara": "REQ_Blessing_Mara",
    "Stendarr": "REQ_Blessing_Stendarr",
    "Talos": "REQ_Blessing_Talos",
    "Zenithar": "REQ_Blessing_Zenithar",
    "Auriel": "REQ_Blessing_Auriel",
    "Azura": "REQ_Blessing_Azura",
    "Boethiah": "REQ_Blessing_Boethiah",
    "Jyggalag": "REQ_Blessing_Jyggalag",
    "Mephala": "REQ_Blessing_Mephala",
    "Namira": "REQ_Blessing_Namira",
    "Nocturnal": "REQ_Blessing_Nocturnal",
    "Peryite": "REQ_Blessing_Peryite",
    "Sheogorath": "REQ_Blessing_Sheogorath",
}

# Smithing tree, the only tree whose EDIDs are shared with the base game.
PERK_NAME_TO_EDID: dict[str, str] = {
    "Steel Smithing": "SteelSmithing",
    "Arcane Blacksmith": "ArcaneBlacksmith",
    "Elven Smithing": "ElvenSmithing",
    "Advanced Armors": "AdvancedArmors",
    "Glass Smithing": "GlassSmithing",
    "Dwarven Smithing": "DwarvenSmithing",
    "Orcish Smithing": "OrcishSmithing",
    "Ebony Smithing": "EbonySmithing",
    "Daedric Smithing": "DaedricSmithing",
    "Dragon Armor": "DragonArmor",
}

# URL slug -> display name, merged with the slugs of loaded records.
PERK_LIST_SLUGS: dict[str, str] = {
    "lorerim-v3-0-4": "LoreRim v3.0.4",
    "lorerim-v4": "LoreRim v4",
    "vanilla": "Vanilla",
}

GAME_MECHANICS_SLUGS: dict[str, str] = {
    "lorerim-v4": "LoreRim v4",
    "vanilla": "Vanilla",
}

PRESET_SLUGS: dict[str, str] = {
    "lorerim-v4": "LoreRim v4",
    "vanilla": "Vanilla",
}
