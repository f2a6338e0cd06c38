import logging
import re

from flask import Flask, jsonify, redirect, render_template_string, request, url_for

from store import InvalidIndexError, TaskStore

DEFAULT_CONFIG = {
    'HOST': '0.0.0.0',
    'PORT': 8080,
}

ALL_METHODS = ['GET', 'HEAD', 'POST', 'PUT', 'PATCH', 'DELETE', 'OPTIONS', 'TRACE']

INDEX_PATTERN = re.compile(r'[+-]?[0-9]+')

INDEX_TEMPLATE = '''
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>To-Do List</title>
    <style>
        body { font-family: Arial, sans-serif; background-color: rgb(65, 32, 107); color: white; margin: 0; }
        .container { max-width: 800px; margin: 100px auto 0; padding: 20px; background-color: rgb(42, 19, 72); border-radius: 5px; }
        h1 { text-align: center; }
        form { display: flex; margin-bottom: 20px; }
        input[type="text"] { flex: 1; padding: 10px; border-radius: 5px; font-size: 16px; margin-right: 10px; }
        button[type="submit"] { padding: 10px 20px; background-color: #4CAF50; color: #fff; border: none; border-radius: 5px; cursor: pointer; }
        ul { list-style-type: none; padding: 0; }
        li { display: flex; justify-content: space-between; align-items: center; margin-bottom: 10px; padding: 10px; background-color: rgb(184, 153, 225); border-radius: 5px; }
        .task-text { flex: 1; color: #e9e2e2; }
        .delete-btn { border: none; border-radius: 50%; cursor: pointer; background-color: transparent; color: white; }
    </style>
</head>
<body>
    <div class="container">
        <h1>To-Do List</h1>
        <form action="{{ url_for('add_task') }}" method="post">
            <input type="text" name="task" placeholder="Enter task..." required>
            <button type="submit">Add Task</button>
        </form>
        <form action="{{ url_for('index') }}" method="get">
            <input type="text" name="search" placeholder="Search..." value="{{ search }}">
            <button type="submit">Search</button>
        </form>
        <ul>
            {% for task in tasks %}
            <li>
                <span class="task-text">{{ task.description }}</span>
                <button class="delete-btn" onclick="deleteTask({{ loop.index0 }})">&#128465;</button>
            </li>
            {% endfor %}
        </ul>
    </div>
    <script>
        function deleteTask(index) {
            fetch('{{ url_for('delete_task') }}?index=' + index, { method: 'GET' })
            .then(response => {
                if (!response.ok) {
                    throw new Error('Delete failed with status ' + response.status);
                }
                window.location.reload();
            })
            .catch(error => console.error(error));
        }
    </script>
</body>
</html>
'''


def parse_index(value):
    """Parse a plain decimal integer, optionally signed. Anything else is invalid."""
    if value is None or not INDEX_PATTERN.fullmatch(value):
        raise InvalidIndexError(f'Invalid index: {value!r}')
    return int(value)


def create_app(store=None, config=None):
    app = Flask(__name__)
    app.config.update(DEFAULT_CONFIG)
    app.config.from_prefixed_env('TODO')
    if config:
        app.config.update(config)

    store = store if store is not None else TaskStore()
    app.extensions['todo_store'] = store

    @app.route('/')
    def index():
        search = request.args.get('search', '')
        # Lock spans the render so the page shows one consistent list
        with store.lock:
            tasks = store.search(search)
            return render_template_string(INDEX_TEMPLATE, tasks=tasks, search=search)

    @app.route('/add', methods=ALL_METHODS, provide_automatic_options=False)
    def add_task():
        if request.method == 'POST':
            # Form body wins, query string is the fallback
            description = request.form.get('task', request.args.get('task', ''))
            task = store.add(description)
            app.logger.info('Added task %r', task.description)
        return redirect(url_for('index'))

    @app.route('/delete', methods=ALL_METHODS, provide_automatic_options=False)
    def delete_task():
        raw_index = request.args.get('index')
        if request.method != 'GET':
            app.logger.warning('Rejected delete (index=%r, method=%s): method not allowed',
                               raw_index, request.method)
            return jsonify({'error': 'Invalid request'}), 400
        try:
            index = parse_index(raw_index)
            task = store.delete(index)
        except InvalidIndexError as exc:
            app.logger.warning('Rejected delete (index=%r, method=%s): %s',
                               raw_index, request.method, exc)
            return jsonify({'error': 'Invalid request'}), 400
        app.logger.info('Deleted task %d %r', index, task.description)
        return jsonify({'message': 'Task deleted successfully'})

    return app


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    app = create_app()
    app.run(host=app.config['HOST'], port=app.config['PORT'], threaded=True)
