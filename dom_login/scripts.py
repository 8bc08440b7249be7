"""
JavaScript snippets executed in the target page.

Each snippet receives its operands through ``arguments`` the way
``WebDriver.execute_script`` passes them.
"""

FOCUS = "arguments[0].focus();"

BLUR = "arguments[0].blur();"

SET_VALUE = "arguments[0].value = arguments[1];"

APPEND_VALUE = "arguments[0].value += arguments[1];"

NATIVE_SUBMIT = "arguments[0].submit();"

GET_STORAGE_ITEM = "return window.localStorage.getItem(arguments[0]);"

# arguments: element, name, family, bubbles, cancelable, key
DISPATCH_EVENT = """
var el = arguments[0];
var init = {bubbles: arguments[3], cancelable: arguments[4]};
var ev;
if (arguments[2] === 'pointer') {
    init.view = window;
    ev = new MouseEvent(arguments[1], init);
} else if (arguments[2] === 'keyboard') {
    init.key = arguments[5];
    ev = new KeyboardEvent(arguments[1], init);
} else {
    ev = new Event(arguments[1], init);
}
return el.dispatchEvent(ev);
"""

HIDE_WEBDRIVER_FLAG = "Object.defineProperty(navigator, 'webdriver', {get: () => undefined})"
