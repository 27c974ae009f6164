"""The demo game: its level scene, keyboard player controller and game layer."""