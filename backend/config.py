import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///kiosk.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Kiosk runs on a trusted LAN; tablet and TV connect from arbitrary hosts
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*')
    # Real-time fan-out: one namespace, one room every display joins
    REALTIME_NAMESPACE = os.environ.get('REALTIME_NAMESPACE', '/ws')
    REALTIME_CHANNEL = os.environ.get('REALTIME_CHANNEL', 'game_updates')
    # Number of players shown on the idle-screen leaderboard
    LEADERBOARD_SIZE = int(os.environ.get('LEADERBOARD_SIZE', '10'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
