"""
Reset all EduFlow data by deleting the local store.
This removes tasks, flashcards, moods, the profile and Pomodoro stats.
"""

import os
from EduFlow.core.paths import store_path

def reset_all_stats(ask=input, db_file=None):
    """Delete the store file after confirmation. Returns True if it was deleted."""
    db_file = db_file or store_path()

    if not db_file.exists():
        print("No data found. Stats are already at 0.")
        return False

    print(f"Found data store at: {db_file}")
    confirm = ask("Are you sure you want to reset all data? This cannot be undone. (yes/no): ")
    if confirm.strip().lower() not in ['yes', 'y']:
        print("Reset cancelled.")
        return False

    try:
        os.remove(db_file)
    except OSError as e:
        print(f"✗ Error deleting data store: {e}")
        return False
    print("✓ Data store deleted successfully!")
    print("\nNext time you open the app, a fresh store will be created.")
    return True

if __name__ == "__main__":
    print("=" * 50)
    print("EduFlow - Reset All Data")
    print("=" * 50)
    reset_all_stats()
    print("\nPress Enter to exit...")
    input()
