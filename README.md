# filedepot

filedepot gives each user a private directory tree on a server. It has two parts:

- **the server** (`filedepot-server`) speaks JSON over HTTP. It checks accounts against a MariaDB/MySQL `users` table and keeps a current directory for each user.
- **the shell** (`filedepot`) is an interactive command-line client. After login it works on either your local machine or your space on the server.

## Installing

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Running the server

```
filedepot-server [--host HOST] [--port PORT]
```

By default the server listens on `0.0.0.0:8080`. The first request that needs an account connects to the database. The connection settings come from the environment:

- `SALT` (required): appended to each password before it is hashed with SHA-512.
- `DB_PASSWORD`: the password of the database user `root`. The database is `test` on `127.0.0.1:3306`. The connection uses TLS with the files in `/etc/mysql/certs/` (`ca.pem`, `server-cert.pem`, `server-key.pem`).

Passwords are stored as upper-case hexadecimal digests (`filedepot.userstore.hash_password`). The `users` table needs an `id` column and a `pw` column. Ids longer than 20 characters are refused, and so are empty ids and empty passwords.

Each user starts in `<home>/<id>`, where `<home>` is the home directory of the account that runs the server.

### Endpoints

| Method | Path        | Body / query               | Reply                                  |
|--------|-------------|----------------------------|----------------------------------------|
| POST   | `/login`    | `{"id": ..., "pw": ...}`   | `{"result": bool, "path": cwd}`        |
| POST   | `/register` | `{"id": ..., "pw": ...}`   | `{"result": bool}`                     |
| POST   | `/mkdir`    | `{"id": ..., "path": ...}` | `{"result": bool, "path": cwd}`        |
| POST   | `/cd`       | `{"id": ..., "path": ...}` | `{"result": bool, "path": cwd}`        |
| GET    | `/ls`       | `?id=<id>`                 | `{"result": [[name, is_dir], ...]}`    |

- `/mkdir` creates any missing parents. Its result is `false` if the directory already exists.
- `/cd` joins the path to the current directory and normalises it. Its result is `false` if the target does not exist.
- `/ls` lists the current directory, sorted by name.
- If a request other than GET has a body that is not a JSON object, or a field that is not a string, the reply is `400 Bad Request`.
- Any other path or method, `/rmdir` included, gets no reply; the connection is closed.

## Using the shell

```
filedepot [--host HOST] [--port PORT]
```

The shell connects to `127.0.0.1:8080` by default and reads commands from standard input. Before you log in, two commands are available:

```
> register alice password
> login alice password
```

After login, the prompt shows your current directory. Commands start on the local side, which begins in `$HOME`:

- `cd [dir]`: change directory. With no argument, go to `$HOME`.
- `ls`: list entries, sorted, each marked `[DIR]` or `[FILE]`.
- `mkdir <dir>`: create a directory and any missing parents.
- `rmdir <dir>`: remove a directory and everything in it.
- `change`: switch between the local and the server side.
- `logout`: end the session.

On the server side, `cd <dir>`, `ls` and `mkdir <dir>` run against your space on the server.

## Using it from Python

- `filedepot.server.dispatch(service, method, target, body)` handles one request without a socket and returns `(status, payload)`, or `None` when no reply is sent.
- `filedepot.server.make_server(service, host, port)` returns an `http.server.HTTPServer` for a `filedepot.service.Service`.
- `filedepot.service.Service` takes an optional `UserStore` and `WorkspaceRegistry`. Without a store it calls `filedepot.userstore.open_store()` on first use.
- `filedepot.userstore.UserStore(connection, salt)` works over any DB-API connection.
- On the client side, `filedepot.http_client.send_request`, `filedepot.local_fs.LocalFs`, `filedepot.remote_fs.RemoteFs` and `filedepot.shell.Shell` are what the shell is built from. Failures raise `ConnectionFailed`, `FsError` or `RemoteError`.

## What it does not do

Files cannot be moved between the client and the server. The shell accepts `upload` and `download`, but they do nothing. On the server side, `rmdir` does nothing either, and the server has no way to remove a directory.