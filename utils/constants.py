"""
CS2 catalog vocabulary shared by the API and the catalog import.
"""

APP_NAME = 'Lilo Store'

# Wear conditions in order from best to worst
SKIN_CONDITIONS = {
    'fn': {'name': 'Factory New', 'short_name': 'FN', 'float_range': '0.00-0.07'},
    'mw': {'name': 'Minimal Wear', 'short_name': 'MW', 'float_range': '0.07-0.15'},
    'ft': {'name': 'Field-Tested', 'short_name': 'FT', 'float_range': '0.15-0.38'},
    'ww': {'name': 'Well-Worn', 'short_name': 'WW', 'float_range': '0.38-0.45'},
    'bs': {'name': 'Battle-Scarred', 'short_name': 'BS', 'float_range': '0.45-1.00'},
}

# Official 8-tier rarity system, common to rare
SKIN_RARITIES = {
    'consumer': {'name': 'Consumer Grade', 'color': '#B0C3D9'},
    'industrial': {'name': 'Industrial Grade', 'color': '#5E98D9'},
    'milspec': {'name': 'Mil-Spec Grade', 'color': '#4B69FF'},
    'restricted': {'name': 'Restricted', 'color': '#8847FF'},
    'classified': {'name': 'Classified', 'color': '#D32CE6'},
    'covert': {'name': 'Covert', 'color': '#EB4B4B'},
    'contraband': {'name': 'Contraband', 'color': '#E4AE39'},
    'extraordinary': {'name': 'Extraordinary', 'color': '#FFEAA7'},
}

SKINS_PER_PAGE = 12
TICKETS_PER_PAGE = 10
MAX_PER_PAGE = 50
