from kiosk import create_app, socketio

app = create_app()

if __name__ == '__main__':
    # Serve through Socket.IO so displays can hold a websocket open
    socketio.run(app, host='0.0.0.0', debug=True)
