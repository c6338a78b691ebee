# codesurfer/templates.py
"""
Starter programs shown when a language is picked in the editor.
"""

DEFAULT_CODE = "// Start coding here"

_TEMPLATES = {
    "javascript": """// JavaScript Hello World
console.log("Hello, World!");

// You can also try:
const name = "Code Surfer";
console.log(`Welcome to ${name}!`);""",
    "python": """# Python Hello World
print("Hello, World!")

# You can also try:
name = "Code Surfer"
print(f"Welcome to {name}!")""",
    "java": """// Java Hello World
public class Main {
    public static void main(String[] args) {
        System.out.println("Hello, World!");

        // You can also try:
        String name = "Code Surfer";
        System.out.println("Welcome to " + name + "!");
    }
}""",
    "cpp": """// C++ Hello World
#include <iostream>
using namespace std;

int main() {
    cout << "Hello, World!" << endl;

    // You can also try:
    string name = "Code Surfer";
    cout << "Welcome to " << name << "!" << endl;

    return 0;
}""",
    "c": """// C Hello World
#include <stdio.h>

int main() {
    printf("Hello, World!\\n");

    // You can also try:
    char name[] = "Code Surfer";
    printf("Welcome to %s!\\n", name);

    return 0;
}""",
    "typescript": """// TypeScript Hello World
const greeting: string = "Hello, World!";
console.log(greeting);

// You can also try:
const name: string = "Code Surfer";
console.log(`Welcome to ${name}!`);""",
    "csharp": """// C# Hello World
using System;

class Program {
    static void Main() {
        Console.WriteLine("Hello, World!");

        // You can also try:
        string name = "Code Surfer";
        Console.WriteLine($"Welcome to {name}!");
    }
}""",
    "ruby": '''# Ruby Hello World
puts "Hello, World!"

# You can also try:
name = "Code Surfer"
puts "Welcome to #{name}!"''',
}


def get_default_code(language_id: str) -> str:
    return _TEMPLATES.get((language_id or "").strip().lower(), DEFAULT_CODE)
