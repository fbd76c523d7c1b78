"""Script/style tags and the inline client code that drives the field widgets."""

import json

from fasthtml.common import Link, NotStr, Script

from settings_core.definitions import Labels


def package_tags(packages: list[dict]) -> list:
    """Link/Script tags for resolved packages, styles before scripts."""
    styles = []
    scripts = []
    for package in packages:
        handle = package.get("handle", "")
        style = package.get("style")
        if isinstance(style, dict) and style.get("src"):
            styles.append(Link(rel="stylesheet", href=style["src"], id=f"{handle}-css"))
        script = package.get("script")
        if isinstance(script, dict) and script.get("src"):
            scripts.append(Script(src=script["src"], id=f"{handle}-js"))
    return [*styles, *scripts]


_INIT_SCRIPT = """
(function () {
    if (window.__settingsFieldsBound) return;
    window.__settingsFieldsBound = true;
    const P = __PREFIX__;
    const L = __LABELS__;

    function each(selector, fn, root) {
        (root || document).querySelectorAll(selector).forEach(fn);
    }

    function initWidgets(root) {
        if (window.jQuery && window.jQuery.fn.select2) {
            try {
                window.jQuery((root || document).querySelectorAll('.' + P + '-select2-field'))
                    .not('.select2-hidden-accessible')
                    .select2({ width: '100%', allowClear: true });
            } catch (e) {
                console.error('Settings: Select2 error', e);
            }
        }
        if (typeof flatpickr !== 'undefined') {
            each('.' + P + '-flatpickr-date', (el) => flatpickr(el, { dateFormat: 'Y-m-d', altInput: true, altFormat: 'F j, Y' }), root);
            each('.' + P + '-flatpickr-datetime', (el) => flatpickr(el, { enableTime: true, dateFormat: 'Y-m-d H:i', altInput: true, altFormat: 'F j, Y at h:i K' }), root);
            each('.' + P + '-flatpickr-time', (el) => flatpickr(el, { enableTime: true, noCalendar: true, dateFormat: 'H:i', time_24hr: true }), root);
        }
        if (typeof Coloris !== 'undefined') {
            Coloris({ el: '.' + P + '-color-picker', format: 'hex', alpha: false });
        }
        if (typeof CodeMirror !== 'undefined') {
            const modes = { css: 'css', js: 'javascript', javascript: 'javascript', html: 'htmlmixed', xml: 'xml' };
            each('.' + P + '-code-editor', (textarea) => {
                if (textarea.dataset.codemirrorInitialized) return;
                const language = (textarea.dataset.language || 'css').toLowerCase();
                const editor = CodeMirror.fromTextArea(textarea, {
                    mode: modes[language] || 'text/plain',
                    lineNumbers: true,
                    lineWrapping: true,
                });
                editor.on('change', () => {
                    editor.save();
                    textarea.dispatchEvent(new Event('change', { bubbles: true }));
                });
                textarea.dataset.codemirrorInitialized = 'true';
            }, root);
        }
        each('.' + P + '-enhanced-range-slider', syncRange, root);
    }

    function syncRange(slider) {
        const box = slider.closest('.' + P + '-enhanced-range-container');
        const mirror = box ? box.querySelector('.' + P + '-range-value-input') : null;
        if (mirror) mirror.value = slider.value;
    }

    function currentValue(form, field) {
        const name = (form.dataset.optionName || '') + '[' + field + ']';
        const multi = form.querySelector('select[name="' + name + '[]"]');
        if (multi) return Array.from(multi.selectedOptions).map((o) => o.value);
        const box = form.querySelector('input[type=checkbox][name="' + name + '"]');
        if (box) return box.checked ? '1' : '0';
        const radios = form.querySelectorAll('input[type=radio][name="' + name + '"]');
        if (radios.length) {
            const checked = form.querySelector('input[type=radio][name="' + name + '"]:checked');
            return checked ? checked.value : '';
        }
        const el = form.querySelector('[name="' + name + '"]');
        return el ? el.value : '';
    }

    function toggleConditionalFields() {
        each('form[data-option-name]', (form) => {
            form.querySelectorAll('[data-conditional]').forEach((container) => {
                const expected = String(container.dataset.conditionalValue || '');
                const operator = container.dataset.conditionalOperator || '==';
                const current = currentValue(form, container.dataset.conditional);
                let show = true;
                switch (operator) {
                    case '==': show = current == expected; break;
                    case '!=': show = current != expected; break;
                    case 'in': show = Array.isArray(current) ? current.includes(expected) : expected.split(',').includes(current); break;
                    case 'not in': show = Array.isArray(current) ? !current.includes(expected) : !expected.split(',').includes(current); break;
                }
                container.style.display = show ? '' : 'none';
            });
        });
    }

    document.addEventListener('click', (event) => {
        const option = event.target.closest('.' + P + '-buttongroup-option');
        if (option) {
            event.preventDefault();
            const group = option.parentElement;
            const hidden = group.parentElement.querySelector('input[type=hidden]');
            group.querySelectorAll('.' + P + '-buttongroup-option').forEach((b) => b.classList.remove('active'));
            option.classList.add('active');
            if (hidden) {
                hidden.value = option.dataset.value || '';
                hidden.dispatchEvent(new Event('change', { bubbles: true }));
            }
            return;
        }
        const upload = event.target.closest('.' + P + '-media-upload-button');
        if (upload) {
            event.preventDefault();
            const input = document.getElementById(upload.dataset.field);
            const picked = window.prompt(L.add_media_title, input ? input.value : '');
            if (input && picked !== null) {
                input.value = String(parseInt(picked, 10) > 0 ? parseInt(picked, 10) : '');
                input.dispatchEvent(new Event('change', { bubbles: true }));
            }
            return;
        }
        const remove = event.target.closest('.' + P + '-media-remove-button');
        if (remove) {
            event.preventDefault();
            const input = document.getElementById(remove.dataset.field);
            if (input) {
                input.value = '';
                input.dispatchEvent(new Event('change', { bubbles: true }));
            }
            const preview = remove.parentElement.querySelector('.' + P + '-media-preview');
            if (preview) preview.innerHTML = '';
            remove.remove();
        }
    });

    document.addEventListener('input', (event) => {
        if (event.target.classList && event.target.classList.contains(P + '-enhanced-range-slider')) {
            syncRange(event.target);
        }
    });
    document.addEventListener('change', toggleConditionalFields);
    document.addEventListener('htmx:afterSwap', (evt) => { initWidgets(evt.target); toggleConditionalFields(); });
    if (document.readyState === 'loading') {
        document.addEventListener('DOMContentLoaded', () => { initWidgets(); toggleConditionalFields(); });
    } else {
        initWidgets();
        toggleConditionalFields();
    }
})();
"""


def init_script(html_prefix: str, labels: Labels) -> Script:
    """Inline script wiring pickers, button groups, media buttons and conditional fields."""
    label_data = {
        "add_media_title": labels.add_media_title,
        "select_media_text": labels.select_media_text,
        "remove_media_text": labels.remove_media_text,
    }
    code = _INIT_SCRIPT.replace("__PREFIX__", json.dumps(html_prefix)).replace("__LABELS__", json.dumps(label_data))
    return Script(code)


def inline_styles(html_prefix: str) -> NotStr:
    p = html_prefix
    return NotStr(
        f"""
        <style>
            .{p}-field-container {{ margin-bottom: 1.25rem; }}
            .{p}-field-label {{ display: block; font-weight: 600; margin-bottom: 0.35rem; }}
            .{p}-description {{ color: #475569; font-size: 0.85rem; }}
            .{p}-toggle {{ position: relative; display: inline-block; width: 50px; height: 24px; vertical-align: middle; }}
            .{p}-toggle input[type=checkbox] {{ opacity: 0; width: 0; height: 0; }}
            .{p}-toggle-slider {{
                position: absolute; cursor: pointer; inset: 0;
                background-color: #ccc; transition: .4s; border-radius: 24px;
            }}
            .{p}-toggle-slider:before {{
                position: absolute; content: ''; height: 18px; width: 18px; left: 3px; bottom: 3px;
                background-color: white; transition: .4s; border-radius: 50%;
            }}
            input:checked + .{p}-toggle-slider {{ background-color: #2271b1; }}
            input:checked + .{p}-toggle-slider:before {{ transform: translateX(26px); }}
            .{p}-buttongroup-container {{ display: inline-flex; border: 1px solid #ccd0d4; border-radius: 4px; overflow: hidden; }}
            .{p}-buttongroup-option {{
                padding: 0 14px; height: 30px; line-height: 28px; background: #f6f7f7;
                border: none; border-right: 1px solid #ccd0d4; cursor: pointer; color: #2c3338;
            }}
            .{p}-buttongroup-option:last-child {{ border-right: none; }}
            .{p}-buttongroup-option.active {{ background: #2271b1; color: white; }}
            .{p}-media-field-container {{ display: flex; align-items: center; gap: 10px; flex-wrap: wrap; }}
            .{p}-enhanced-range-container {{ display: flex; align-items: center; gap: 15px; max-width: 400px; }}
            .{p}-enhanced-range-slider {{ flex: 1; }}
            .{p}-range-value-input {{ width: 70px; text-align: center; }}
            .{p}-radio-label {{ display: block; margin-bottom: 0.25rem; }}
        </style>
        """
    )
