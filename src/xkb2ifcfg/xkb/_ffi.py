# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import functools
import logging

from cffi import FFI

logger = logging.getLogger(__name__)

LIBRARY_NAMES = ("libxkbcommon.so.0", "xkbcommon")

ffi = FFI()

ffi.cdef(
    """
/* xkbcommon */
typedef uint32_t xkb_keycode_t;
typedef uint32_t xkb_keysym_t;
typedef uint32_t xkb_layout_index_t;
typedef uint32_t xkb_level_index_t;

struct xkb_context;
struct xkb_keymap;
struct xkb_state;

struct xkb_rule_names {
    const char *rules;
    const char *model;
    const char *layout;
    const char *variant;
    const char *options;
};

enum xkb_context_flags {
    XKB_CONTEXT_NO_FLAGS = 0,
    XKB_CONTEXT_NO_DEFAULT_INCLUDES = 1,
    XKB_CONTEXT_NO_ENVIRONMENT_NAMES = 2
};

enum xkb_keymap_compile_flags {
    XKB_KEYMAP_COMPILE_NO_FLAGS = 0
};

enum xkb_keymap_format {
    XKB_KEYMAP_FORMAT_TEXT_V1 = 1
};

enum xkb_key_direction {
    XKB_KEY_UP,
    XKB_KEY_DOWN
};

struct xkb_context *xkb_context_new(enum xkb_context_flags flags);
void xkb_context_unref(struct xkb_context *context);

struct xkb_keymap *xkb_keymap_new_from_names(struct xkb_context *context,
                                             const struct xkb_rule_names *names,
                                             enum xkb_keymap_compile_flags flags);
void xkb_keymap_unref(struct xkb_keymap *keymap);
char *xkb_keymap_get_as_string(struct xkb_keymap *keymap,
                               enum xkb_keymap_format format);
xkb_keycode_t xkb_keymap_min_keycode(struct xkb_keymap *keymap);
xkb_keycode_t xkb_keymap_max_keycode(struct xkb_keymap *keymap);
xkb_level_index_t xkb_keymap_num_levels_for_key(struct xkb_keymap *keymap,
                                                xkb_keycode_t key,
                                                xkb_layout_index_t layout);
int xkb_keymap_key_get_syms_by_level(struct xkb_keymap *keymap,
                                     xkb_keycode_t key,
                                     xkb_layout_index_t layout,
                                     xkb_level_index_t level,
                                     const xkb_keysym_t **syms_out);

struct xkb_state *xkb_state_new(struct xkb_keymap *keymap);
void xkb_state_unref(struct xkb_state *state);
/* actually returns enum xkb_state_component, a bitmask of changed components */
int xkb_state_update_key(struct xkb_state *state, xkb_keycode_t key,
                         enum xkb_key_direction direction);
xkb_keysym_t xkb_state_key_get_one_sym(struct xkb_state *state,
                                       xkb_keycode_t key);
int xkb_state_key_get_utf8(struct xkb_state *state, xkb_keycode_t key,
                           char *buffer, size_t size);

int xkb_keysym_get_name(xkb_keysym_t keysym, char *buffer, size_t size);
int xkb_keysym_to_utf8(xkb_keysym_t keysym, char *buffer, size_t size);

/* xkbcommon-compose */
struct xkb_compose_table;
struct xkb_compose_state;

enum xkb_compose_compile_flags {
    XKB_COMPOSE_COMPILE_NO_FLAGS = 0
};

enum xkb_compose_state_flags {
    XKB_COMPOSE_STATE_NO_FLAGS = 0
};

enum xkb_compose_status {
    XKB_COMPOSE_NOTHING,
    XKB_COMPOSE_COMPOSING,
    XKB_COMPOSE_COMPOSED,
    XKB_COMPOSE_CANCELLED
};

enum xkb_compose_feed_result {
    XKB_COMPOSE_FEED_IGNORED,
    XKB_COMPOSE_FEED_ACCEPTED
};

struct xkb_compose_table *
xkb_compose_table_new_from_locale(struct xkb_context *context,
                                  const char *locale,
                                  enum xkb_compose_compile_flags flags);
void xkb_compose_table_unref(struct xkb_compose_table *table);

struct xkb_compose_state *
xkb_compose_state_new(struct xkb_compose_table *table,
                      enum xkb_compose_state_flags flags);
void xkb_compose_state_unref(struct xkb_compose_state *state);
void xkb_compose_state_reset(struct xkb_compose_state *state);
enum xkb_compose_feed_result
xkb_compose_state_feed(struct xkb_compose_state *state, xkb_keysym_t keysym);
enum xkb_compose_status
xkb_compose_state_get_status(struct xkb_compose_state *state);

/* libc */
void free(void *ptr);
"""
)


@functools.cache
def libxkbcommon():
    errors = []
    for name in LIBRARY_NAMES:
        try:
            lib = ffi.dlopen(name)
        except OSError as exc:
            errors.append(exc)
            continue
        logger.debug("Loaded %s", name)
        return lib
    raise OSError(f"unable to load libxkbcommon: {errors}")


@functools.cache
def libc():
    return ffi.dlopen(None)
