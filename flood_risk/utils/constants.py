"""Project-wide constants."""

FLOOD_TYPE_RIVERINE = "inunriver"

SCENARIOS = ["historical", "rcp4p5", "rcp8p5"]

YEARS = [2010, 2030, 2050, 2080]

RETURN_PERIODS = [1, 2, 5, 10, 25, 50, 100, 250, 500, 1000]

LEGACY_RETURN_PERIODS = [25, 50, 100, 200, 500, 1000]
LEGACY_DEFAULT_RETURN_PERIOD = 25

CLIMATE_MODELS = {
    "00000NorESM1-M": "NorESM1-M: Bjerknes Centre for Climate Research, Norwegian Meteorological Institute",
    "0000GFDL_ESM2M": "GFDL_ESM2M: Geophysical Fluid Dynamics Laboratory (NOAA)",
    "0000HadGEM2-ES": "HadGEM2-ES: Met Office Hadley Centre",
    "00IPSL-CM5A-LR": "IPSL-CM5A-LR: Institut Pierre Simon Laplace",
}

DEFAULT_ASSET_CLASS = "industry"

RISK_LEVELS = {
    "high": "High",
    "medium": "Medium",
    "low": "Low",
    "no_data": "No Data",
}

DEPTH_MODES = {
    "point": "point",
    "buffered": "max",
    "none": "none",
}

GEE_DATASET_PROPERTIES = {
    "flood_type": "floodtype",
    "scenario": "climatescenario",
    "return_period": "returnperiod",
    "year": "year",
    "model": "model",
}

DEMO_FACTORIES = [
    {"name": "Kinpo Electronics (Taiwan)", "coords": [121.602908, 25.002766], "asset_value": 50000000, "type": "industry"},
    {"name": "Cal-Comp (Thailand)", "coords": [100.5604182, 13.7325002], "asset_value": 30000000, "type": "industry"},
    {"name": "Cal-Comp (Philippines)", "coords": [121.1792173, 14.0136501], "asset_value": 25000000, "type": "industry"},
]
