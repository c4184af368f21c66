# rtype

A small multiplayer side-scrolling shooter. An authoritative game server
tracks players, enemies and projectiles with an entity-component system and
streams their state to up to four clients over UDP. The client draws the
scene with pygame and sends key codes back to the server.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Playing

Start the server. By default it listens for UDP datagrams on
`0.0.0.0`, port 9876:

```
rtype-server
rtype-server --host 127.0.0.1 --port 9876
```

Then start one client per player:

```
rtype-client
rtype-client --address 127.0.0.1:9876 --name leo
```

`--address` is the server's `host:port` (default `127.0.0.1:9876`) and
`--name` the player name sent when logging in (default `leo`). The client
shows a menu first; click **Play** to connect and join the game. The server
accepts at most four players.

### Controls

| Key         | Effect                           |
|-------------|----------------------------------|
| Arrow keys  | Move the ship                    |
| Space       | Shoot                            |
| S or T      | Start level one                  |
| D           | Start level two (the boss)       |
| Q           | Take one point of damage (debug) |
| Escape      | Leave the game                   |

Starting a level revives every player at the start point. Level one sends
repeating waves of mosquitoes and planes and is won after ninety seconds.
Level two brings in the alien boss after one second; it is won once the boss
is destroyed, and lasts at least five seconds. When every player has died,
the running level ends and every enemy and projectile is destroyed.

## Resource files

The client loads its images, sounds and fonts from a `ressources/` directory
relative to the working directory (`ressources/bgt.png`,
`ressources/img/...`, `ressources/sounds/...`, `ressources/fonts/...`).
These files are not part of the package. Without the menu background
`ressources/bgt.png` or the menu sound `ressources/sounds/meunu.ogg` the menu
closes at once and the client exits; missing fonts fall back to pygame's
default font, and missing game textures and sounds are logged and left blank.

## Wire format

Clients send a single little-endian 16-bit key code per datagram (see
`rtype.settings.KeyCode`); any datagram of another length is taken as the
player's name and logs the sender in. The server sends one
`rtype.protocol.EntityState` record per entity about 60 times a second:
four little-endian 32-bit integers (x, y, sprite code, id) and an alive
flag, padded to 20 bytes. Dead entities are sent once more and then
destroyed.

## Using the engine

The entity-component core lives in `rtype.ecs`: `Coordinator` ties together
an `EntityManager`, a `ComponentManager` and a `SystemManager`, and raises
`EcsError` on misuse. `rtype.game.GameStruct` holds the server's game state,
and `rtype.server.GameServer` drives it: `handle_datagram` applies client
input, `update` advances the simulation one frame and `send_frame` streams
the states. `GameServer` takes any object with `sendto`/`recvfrom`, so it can
be run against a fake socket.

## What it does not do

- The address and name typed into the menu are not used; the client always
  connects with `--address` and `--name`.
- The server notices a client leaving only when it sends the escape key code;
  clients that simply stop sending stay in the game.
- There is no options or game-over screen, no score and no saved state.