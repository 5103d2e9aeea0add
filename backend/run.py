from verdict import create_app, socketio

app = create_app()

if __name__ == '__main__':
    # Serve HTTP and websockets from the same listener
    socketio.run(
        app,
        host=app.config['HOST'],
        port=app.config['PORT'],
        allow_unsafe_werkzeug=True,
    )
