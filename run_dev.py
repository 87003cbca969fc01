import os

print("⏳ [RUNNER] Building app...")
from kashrut_reports.app import create_app

app = create_app()
print("✅ [RUNNER] App ready.")

if __name__ == "__main__":
    try:
        port = int(os.environ.get("PORT", 8080))
        print(f"🚀 [RUNNER] STARTING APP ON PORT {port}...")
        app.run(host="0.0.0.0", port=port, debug=True, use_reloader=False)
    except Exception as e:
        print(f"❌ [RUNNER] ERROR: {e}")
