from trailmap.appconfig import DEFAULT_CONFIG, save_config


def run():
    print("Welcome to trailmap configuration!")
    config = {}

    # Home timezone
    print("\n--- Timezone Configuration ---")
    print("Common timezones: UTC, US/Eastern, US/Pacific, Europe/London, Asia/Shanghai")
    timezone = input(f"Home timezone (default: {DEFAULT_CONFIG['home_timezone']}): ").strip()
    config["home_timezone"] = timezone or DEFAULT_CONFIG["home_timezone"]

    # Debug mode
    debug_input = input("\nEnable debug mode? (y/N): ").strip().lower()
    config["debug"] = debug_input == "y"

    # Folders
    print("\n--- Folder Configuration ---")
    data_folder = input(f"Folder with .gpx/.fit files (default: {DEFAULT_CONFIG['data_folder']}): ").strip()
    config["data_folder"] = data_folder or DEFAULT_CONFIG["data_folder"]
    export_folder = input(f"Folder for exported GPX files (default: {DEFAULT_CONFIG['export_folder']}): ").strip()
    config["export_folder"] = export_folder or DEFAULT_CONFIG["export_folder"]

    path = save_config(config)
    print(f"\nConfiguration saved to {path}")
